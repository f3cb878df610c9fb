"""Time arithmetic for spinner, progress bar and countdown cadences.

Every function here is pure: given the current counter, the time of the
last tick and ``now`` it returns the next counter and tick time. Calling
one without enough elapsed time returns its inputs unchanged, so repeated
calls within the same interval are harmless.
"""

from __future__ import annotations

from dataclasses import dataclass

COUNTDOWN_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class Tick:
    """Result of one cadence check."""

    elapsed: bool
    value: int
    last_tick: float


@dataclass(frozen=True)
class CountdownTick(Tick):
    """Countdown check; ``expired`` is set when a second passes at zero."""

    expired: bool = False


def interval_elapsed(now: float, last_tick: float, interval_seconds: float) -> bool:
    """Return True once ``interval_seconds`` have passed since ``last_tick``."""
    return now - last_tick >= interval_seconds


def advance_spinner(
    step: int, frame_count: int, now: float, last_tick: float, interval_ms: int
) -> Tick:
    """Advance the spinner frame index, wrapping at ``frame_count``."""
    if frame_count <= 0 or not interval_elapsed(now, last_tick, interval_ms / 1000):
        return Tick(elapsed=False, value=step, last_tick=last_tick)
    return Tick(elapsed=True, value=(step + 1) % frame_count, last_tick=now)


def advance_bar(position: int, now: float, last_tick: float, interval_ms: int) -> Tick:
    """Advance the indeterminate bar position; it only ever grows."""
    if not interval_elapsed(now, last_tick, interval_ms / 1000):
        return Tick(elapsed=False, value=position, last_tick=last_tick)
    return Tick(elapsed=True, value=position + 1, last_tick=now)


def advance_countdown(remaining: int, now: float, last_tick: float) -> CountdownTick:
    """Decrement the countdown once per second, never below zero.

    When a full second passes while the countdown already shows zero the
    tick reports ``expired`` and leaves ``last_tick`` alone; the caller
    owns completing the sequence.
    """
    if not interval_elapsed(now, last_tick, COUNTDOWN_INTERVAL_SECONDS):
        return CountdownTick(elapsed=False, value=remaining, last_tick=last_tick)
    if remaining > 0:
        return CountdownTick(elapsed=True, value=remaining - 1, last_tick=now)
    return CountdownTick(elapsed=True, value=0, last_tick=last_tick, expired=True)


def simulation_expired(started_at: float | None, now: float, timeout_seconds: float) -> bool:
    """Return True once a dry-run simulation has run for ``timeout_seconds``."""
    if started_at is None:
        return False
    return now - started_at >= timeout_seconds
