"""Abstract base class for load profiles."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from crocload._internal.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterator


class LoadPattern(ABC):
    """How many virtual users should be active at a given time.

    A pattern is data, not an executor: :meth:`users_at` answers for one
    instant and :meth:`iter_concurrency` samples it at a fixed tick.

    Example::

        pattern = RampPattern(start_users=0, end_users=5, ramp_duration=30.0)
        for elapsed, users in pattern.iter_concurrency(duration_seconds=30.0):
            print(f"t={elapsed:.0f}s -> {users} VUs")
    """

    @abstractmethod
    def users_at(self, elapsed_seconds: float) -> int:
        """Return the target number of virtual users at *elapsed_seconds*."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable description for logs and the CLI."""

    def iter_concurrency(
        self,
        duration_seconds: float,
        tick_interval: float = 1.0,
    ) -> Iterator[tuple[float, int]]:
        """Yield ``(elapsed_seconds, target_concurrency)`` at each tick.

        Ticks start at 0 and include *duration_seconds* when it falls on a
        tick boundary.

        Args:
            duration_seconds: Total duration to generate ticks for.
            tick_interval: Seconds between ticks. Defaults to 1.0.

        Raises:
            ConfigError: If either argument is not positive.
        """
        _validate_positive(duration_seconds, "duration_seconds")
        _validate_positive(tick_interval, "tick_interval")
        tick = 0
        elapsed = 0.0
        while elapsed <= duration_seconds:
            yield (elapsed, self.users_at(elapsed))
            tick += 1
            elapsed = tick * tick_interval


def _validate_positive(value: float, name: str) -> None:
    """Raise :class:`ConfigError` if *value* is not strictly positive."""
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        raise ConfigError(msg)


def _validate_non_negative(value: float, name: str) -> None:
    """Raise :class:`ConfigError` if *value* is negative."""
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ConfigError(msg)
