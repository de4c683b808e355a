"""Backoff schedules for reconnect pacing.

This module provides the pieces used to pace reconnection attempts:
- ExponentialBackoff: a re-iterable, infinite delay definition
- RepeatLast: a cursor that repeats the last delay once its input runs out
- validate_backoff: precondition check run before a supervisor starts
"""

import itertools
import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import final

from sourcewatch.exceptions import BackoffConfigError


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential backoff definition with optional cap and jitter.

    Iterating the definition yields an infinite sequence of delays. Each
    call to ``iter()`` starts over from ``base``, so the same definition
    can hand out any number of independent cursors.

    The delay formula is:
        delay = min(base * (multiplier ^ attempt), max_delay)
        delay = delay * (1 - jitter/2 + random() * jitter)

    Attributes:
        base: Delay in seconds for the first retry.
        multiplier: Factor to multiply delay for each attempt.
        max_delay: Maximum delay in seconds, or None for no cap.
        jitter: Fraction of delay to randomize (0.0-1.0).
    """

    base: float = 0.02
    multiplier: float = 2.0
    max_delay: float | None = None
    jitter: float = 0.0

    def delay(self, attempt: int) -> float:
        """Calculate the delay for a given attempt number.

        Args:
            attempt: The attempt number (0-indexed, where 0 is the first retry).

        Returns:
            The delay in seconds before the next retry attempt.
        """
        delay = self.base * (self.multiplier**attempt)

        if self.max_delay is not None:
            delay = min(delay, self.max_delay)

        if self.jitter > 0:
            jitter_range = delay * self.jitter
            jitter_offset = random.uniform(-jitter_range / 2, jitter_range / 2)  # noqa: S311
            delay = max(0.0, delay + jitter_offset)

        return delay

    def __iter__(self) -> Iterator[float]:
        return (self.delay(attempt) for attempt in itertools.count())


@final
class RepeatLast:
    """Cursor over a delay sequence that never runs out.

    Yields the input's values in order; once the input is exhausted, the
    last value it produced is repeated forever. Restarting means building
    a new cursor from the original definition, never rewinding this one.
    """

    __slots__ = ("_exhausted", "_it", "_last")

    def __init__(self, delays: Iterable[float]) -> None:
        self._it: Iterator[float] = iter(delays)
        self._last: float | None = None
        self._exhausted = False

    def next_delay(self) -> float:
        """Advance the cursor one step and return the delay.

        Raises:
            BackoffConfigError: If the input never produced a value, or
                produced a negative one.
        """
        if not self._exhausted:
            try:
                delay = next(self._it)
            except StopIteration:
                self._exhausted = True
            else:
                if delay < 0:
                    msg = f"Backoff delays must be non-negative, got {delay!r}"
                    raise BackoffConfigError(msg)
                self._last = delay

        if self._last is None:
            msg = "Backoff sequence is empty; there is no delay to repeat"
            raise BackoffConfigError(msg)
        return self._last

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.next_delay()


def validate_backoff(delays: Iterable[float]) -> Iterable[float]:
    """Check that a backoff definition can hand out fresh cursors.

    Args:
        delays: The backoff definition.

    Returns:
        The definition, unchanged.

    Raises:
        BackoffConfigError: If the definition is a one-shot iterator or
            yields no delays.
    """
    if isinstance(delays, Iterator):
        msg = (
            "Backoff definition must be re-iterable (e.g. a list or "
            "ExponentialBackoff), not a one-shot iterator"
        )
        raise BackoffConfigError(msg)

    for delay in delays:
        if delay < 0:
            msg = f"First backoff delay must be non-negative, got {delay!r}"
            raise BackoffConfigError(msg)
        return delays

    msg = "Backoff definition must yield at least one delay"
    raise BackoffConfigError(msg)
