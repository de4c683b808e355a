import itertools

import pytest
from hypothesis import given, strategies as st

from sourcewatch.exceptions import BackoffConfigError
from sourcewatch.monitor import ExponentialBackoff, RepeatLast, validate_backoff

delays = st.floats(min_value=0, max_value=3600, allow_nan=False)


@given(values=st.lists(delays, min_size=1, max_size=20), extra=st.integers(0, 50))
def test_repeat_last_yields_input_then_repeats_final_value(
    values: list[float], extra: int
) -> None:
    cursor = RepeatLast(values)

    produced = [cursor.next_delay() for _ in range(len(values) + extra)]

    assert produced == values + [values[-1]] * extra


@given(values=st.lists(delays, min_size=1, max_size=20), steps=st.integers(0, 40))
def test_fresh_cursor_always_starts_at_first_value(
    values: list[float], steps: int
) -> None:
    used = RepeatLast(values)
    for _ in range(steps):
        _ = used.next_delay()

    assert RepeatLast(values).next_delay() == values[0]


@given(
    base=st.floats(min_value=0.001, max_value=10),
    multiplier=st.floats(min_value=1, max_value=4),
    cap=st.floats(min_value=0.001, max_value=100),
)
def test_exponential_backoff_is_non_decreasing_and_capped(
    base: float, multiplier: float, cap: float
) -> None:
    values = list(
        itertools.islice(
            ExponentialBackoff(base=base, multiplier=multiplier, max_delay=cap), 30
        )
    )

    assert all(a <= b for a, b in itertools.pairwise(values))
    assert all(value <= cap for value in values)


@given(values=st.lists(delays, min_size=1, max_size=5))
def test_one_shot_iterators_are_rejected(values: list[float]) -> None:
    with pytest.raises(BackoffConfigError):
        _ = validate_backoff(iter(values))


def test_empty_cursor_flags_precondition_violation() -> None:
    with pytest.raises(BackoffConfigError):
        _ = RepeatLast(()).next_delay()
