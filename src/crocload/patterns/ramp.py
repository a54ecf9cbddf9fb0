"""Ramp load: linear interpolation between two virtual user counts."""

from __future__ import annotations

from crocload._internal.errors import ConfigError
from crocload.patterns.base import LoadPattern, _validate_non_negative, _validate_positive


class RampPattern(LoadPattern):
    """Linearly move from *start_users* to *end_users* over *ramp_duration*.

    After the ramp the pattern holds at *end_users*. Ramping down is a ramp
    with ``end_users < start_users``.

    Args:
        start_users: Virtual users at t=0. Must be >= 0.
        end_users: Virtual users at the end of the ramp. Must be >= 0.
        ramp_duration: Seconds over which the ramp occurs. Must be > 0.

    Raises:
        ConfigError: If any argument is out of range, or the two counts
            are equal.

    Example::

        pattern = RampPattern(start_users=0, end_users=5, ramp_duration=30.0)
        assert pattern.users_at(0.0) == 0
        assert pattern.users_at(15.0) == 2
        assert pattern.users_at(30.0) == 5
    """

    def __init__(
        self,
        start_users: int,
        end_users: int,
        ramp_duration: float,
    ) -> None:
        _validate_non_negative(start_users, "start_users")
        _validate_non_negative(end_users, "end_users")
        _validate_positive(ramp_duration, "ramp_duration")
        if start_users == end_users:
            msg = "start_users and end_users must differ; use ConstantPattern to hold"
            raise ConfigError(msg)
        self._start_users = start_users
        self._end_users = end_users
        self._ramp_duration = ramp_duration

    def users_at(self, elapsed_seconds: float) -> int:
        if elapsed_seconds >= self._ramp_duration:
            return self._end_users
        if elapsed_seconds <= 0:
            return self._start_users
        fraction = elapsed_seconds / self._ramp_duration
        # Truncates toward zero
        return max(int(self._start_users + (self._end_users - self._start_users) * fraction), 0)

    def describe(self) -> str:
        return f"Ramp: {self._start_users} -> {self._end_users} users over {self._ramp_duration}s"
