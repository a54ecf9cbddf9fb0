"""Composite load: patterns chained one after another."""

from __future__ import annotations

from typing import TYPE_CHECKING

from crocload._internal.errors import ConfigError
from crocload.patterns.base import LoadPattern, _validate_positive

if TYPE_CHECKING:
    from collections.abc import Sequence


class CompositePattern(LoadPattern):
    """Run each ``(pattern, duration)`` phase in turn.

    Elapsed time is continuous across phases: phase *n* sees a local clock
    starting at the sum of the previous durations. At an exact phase
    boundary the next phase applies. Past the end, the last phase's final
    value holds.

    Args:
        phases: Sequence of ``(LoadPattern, duration_seconds)`` tuples.
            Must contain at least one phase. All durations must be > 0.

    Raises:
        ConfigError: If *phases* is empty or any duration is not positive.

    Example::

        pattern = CompositePattern(
            [
                (RampPattern(start_users=0, end_users=5, ramp_duration=30.0), 30.0),
                (ConstantPattern(users=5), 30.0),
                (RampPattern(start_users=5, end_users=0, ramp_duration=30.0), 30.0),
            ]
        )
        assert pattern.users_at(45.0) == 5
    """

    def __init__(self, phases: Sequence[tuple[LoadPattern, float]]) -> None:
        if not phases:
            msg = "phases must contain at least one (pattern, duration) entry"
            raise ConfigError(msg)
        validated: list[tuple[LoadPattern, float]] = []
        for i, (pattern, duration) in enumerate(phases):
            _validate_positive(duration, f"phases[{i}] duration")
            validated.append((pattern, duration))
        self._phases = validated

    @property
    def total_duration(self) -> float:
        """Sum of all phase durations in seconds."""
        return sum(duration for _, duration in self._phases)

    def users_at(self, elapsed_seconds: float) -> int:
        offset = 0.0
        for pattern, duration in self._phases:
            if elapsed_seconds < offset + duration:
                return pattern.users_at(max(elapsed_seconds - offset, 0.0))
            offset += duration
        last_pattern, last_duration = self._phases[-1]
        return last_pattern.users_at(last_duration)

    def describe(self) -> str:
        phase_descs = [
            f"  {i + 1}. {p.describe()} ({d}s)" for i, (p, d) in enumerate(self._phases)
        ]
        header = f"Composite: {len(self._phases)} phases, {self.total_duration}s total"
        return "\n".join([header, *phase_descs])
