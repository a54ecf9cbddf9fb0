"""Write-only custom metric sinks: trends, counters and rates.

The scenario only ever adds to these. Reading them back (``avg``,
``percentile``, ``rate``) is for the end-of-run summary.
"""

from __future__ import annotations

import numpy as np


class Trend:
    """Distribution of numeric samples, typically durations in milliseconds.

    Attributes:
        name: Metric name (e.g., ``"login_duration"``).
        is_time: True when samples are durations in milliseconds.
    """

    def __init__(self, name: str, *, is_time: bool = True) -> None:
        self.name = name
        self.is_time = is_time
        self._samples: list[float] = []

    def add(self, value: float) -> None:
        """Append one sample."""
        self._samples.append(float(value))

    @property
    def samples(self) -> list[float]:
        """Return a copy of the recorded samples."""
        return list(self._samples)

    @property
    def count(self) -> int:
        return len(self._samples)

    @property
    def min(self) -> float:
        return min(self._samples) if self._samples else 0.0

    @property
    def max(self) -> float:
        return max(self._samples) if self._samples else 0.0

    @property
    def avg(self) -> float:
        if not self._samples:
            return 0.0
        return float(np.mean(np.asarray(self._samples, dtype=np.float64)))

    def percentile(self, p: float) -> float:
        """Return the *p*-th percentile (0-100) of the samples.

        Args:
            p: Percentile to compute, between 0 and 100.

        Returns:
            The percentile value, or 0.0 when no samples were recorded.

        Raises:
            ValueError: If *p* is outside [0, 100].
        """
        if not 0.0 <= p <= 100.0:
            msg = f"percentile must be between 0 and 100, got {p}"
            raise ValueError(msg)
        if not self._samples:
            return 0.0
        return float(np.percentile(np.asarray(self._samples, dtype=np.float64), p))

    def format(self, value: float) -> str:
        """Render *value* for display, with an ``ms`` suffix for time trends."""
        return f"{value:.1f}ms" if self.is_time else f"{value:.1f}"


class Counter:
    """Monotonic cumulative counter."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._value = 0

    def add(self, value: int = 1) -> None:
        """Increase the counter by *value*.

        Raises:
            ValueError: If *value* is negative.
        """
        if value < 0:
            msg = f"Counter {self.name} cannot decrease, got {value}"
            raise ValueError(msg)
        self._value += value

    @property
    def value(self) -> int:
        return self._value


class Rate:
    """Fraction of truthy samples among all samples added."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._passes = 0
        self._total = 0

    def add(self, flag: bool | int) -> None:
        """Record one sample; any truthy value counts as a pass."""
        self._total += 1
        if flag:
            self._passes += 1

    @property
    def passes(self) -> int:
        return self._passes

    @property
    def total(self) -> int:
        return self._total

    @property
    def rate(self) -> float:
        """Return ``passes / total``, or 0.0 when nothing was added."""
        if self._total == 0:
            return 0.0
        return self._passes / self._total
