"""
Property-based tests using Hypothesis.

These extend the factory's built-in verification with Hypothesis's
shrinking and strategy machinery, covering moduli and event sequences
that are too large to enumerate.
"""

from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import integers

from channels import Channel, ChannelState
from counter import BoundedCounter


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@st.composite
def counters(draw, max_modulus: int = 1_000):
    """Hypothesis strategy that generates valid counters."""
    m = draw(integers(min_value=1, max_value=max_modulus))
    v = draw(integers(min_value=0, max_value=m - 1))
    return BoundedCounter(v, m)


channel_names = st.sampled_from([c.value for c in Channel] + ["Purple"])

text_entries = st.tuples(
    st.just("text"),
    channel_names,
    st.one_of(
        integers(min_value=-50, max_value=300).map(str),
        st.text(max_size=4),
    ),
)

button_presses = st.tuples(
    st.just("button"),
    channel_names,
    integers(min_value=-600, max_value=600),
)

events = st.lists(st.one_of(text_entries, button_presses), max_size=30)


# ---------------------------------------------------------------------------
# Counter properties
# ---------------------------------------------------------------------------

class TestCounterProperties:
    @given(c=counters(), d=integers(min_value=-5_000, max_value=5_000))
    def test_closure(self, c, d):
        c.update(d)
        assert 0 <= c.value < c.modulus

    @given(c=counters())
    def test_full_cycle(self, c):
        before = c.value
        c.step_forward(c.modulus)
        assert c.value == before

    @given(c=counters(), d=integers(min_value=-5_000, max_value=5_000))
    def test_update_inverse(self, c, d):
        before = c.value
        c.update(d)
        c.update(-d)
        assert c.value == before

    @given(c=counters(), a=integers(-500, 500), b=integers(-500, 500))
    def test_updates_compose(self, c, a, b):
        other = BoundedCounter(c.value, c.modulus)
        c.update(a)
        c.update(b)
        other.update(a + b)
        assert c == other

    @given(c=counters(), d=integers(min_value=-5_000, max_value=5_000))
    def test_modulus_never_changes(self, c, d):
        m = c.modulus
        c.update(d)
        c.reset()
        assert c.modulus == m

    @given(v=integers(0, 9), m1=integers(10, 500), m2=integers(10, 500))
    def test_order_ignores_modulus(self, v, m1, m2):
        a, b = BoundedCounter(v, m1), BoundedCounter(v, m2)
        assert a.compare_to(b) == 0
        assert a <= b and a >= b
        assert (a == b) == (m1 == m2)


# ---------------------------------------------------------------------------
# Channel engine properties
# ---------------------------------------------------------------------------

def _apply(state: ChannelState, event) -> None:
    kind, channel, arg = event
    if kind == "text":
        state.set_channel_from_text(channel, arg)
    else:
        state.step_channel_by_button(channel, arg)


class TestChannelProperties:
    @given(seq=events)
    @settings(max_examples=200)
    def test_values_always_in_range(self, seq):
        state = ChannelState()
        for event in seq:
            _apply(state, event)
            for channel in Channel:
                value = state.get_channel_value(channel)
                assert value is None or 0 <= value <= 255

    @given(seq=events)
    @settings(max_examples=200)
    def test_hex_defined_iff_complete(self, seq):
        state = ChannelState()
        for event in seq:
            _apply(state, event)
            rgb = state.combined_color
            if rgb is None:
                assert state.get_hex() is None
            else:
                assert state.get_hex() == "%02X%02X%02X" % rgb

    @given(seq=events)
    def test_one_notification_per_recognized_event(self, seq):
        state = ChannelState()
        calls = []
        state.set_observer(lambda: calls.append(1))
        for event in seq:
            _apply(state, event)
        recognized = [e for e in seq if e[1] != "Purple"]
        assert len(calls) == len(recognized)

    @given(v=integers(0, 255), amount=integers(-2_000, 2_000))
    def test_button_matches_modular_sum(self, v, amount):
        state = ChannelState()
        state.set_channel_from_text("Green", str(v))
        state.step_channel_by_button("Green", amount)
        assert state.green == (v + amount) % 256

    @given(text=st.text(max_size=6))
    def test_text_sets_iff_integer_in_range(self, text):
        state = ChannelState()
        state.set_channel_from_text("Red", "128")
        state.set_channel_from_text("Red", text)
        digits = text[1:] if text[:1] in ("+", "-") else text
        if digits and all(ch in "0123456789" for ch in digits):
            parsed = int(text)
        else:
            parsed = None
        if parsed is not None and 0 <= parsed <= 255:
            assert state.red == parsed
        else:
            assert state.red is None

    @given(amount=integers(-1_000, 1_000))
    def test_button_on_unset_channel_is_noop(self, amount):
        state = ChannelState()
        state.step_channel_by_button("Blue", amount)
        assert state.blue is None
