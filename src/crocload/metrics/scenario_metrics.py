"""The named metrics the crocodile scenario writes to."""

from __future__ import annotations

from typing import TYPE_CHECKING

from crocload._internal.logging import get_logger
from crocload.metrics.custom import Counter, Rate, Trend

if TYPE_CHECKING:
    from crocload.client.http_client import RequestMetric

logger = get_logger("metrics.scenario")

# Step name -> trend name, in execution order.
STEP_TRENDS: dict[str, str] = {
    "login": "login_duration",
    "create": "create_duration",
    "update": "update_duration",
    "patch": "patch_duration",
    "delete": "delete_duration",
}


class ScenarioMetrics:
    """Per-step duration trends, a success counter and a failure rate.

    ``record_request`` is designed to be passed as
    ``HttpClient.metric_callback``: the request's logical name selects the
    trend, so every issued request contributes one duration sample whether
    its check passes or not.

    Attributes:
        successful_requests: Incremented once per passed check.
        failed_requests: One sample per check, True when the check failed.
    """

    def __init__(self) -> None:
        self._trends: dict[str, Trend] = {
            step: Trend(trend_name, is_time=True) for step, trend_name in STEP_TRENDS.items()
        }
        self.successful_requests = Counter("successful_requests")
        self.failed_requests = Rate("failed_requests")

    @property
    def login_duration(self) -> Trend:
        return self._trends["login"]

    @property
    def create_duration(self) -> Trend:
        return self._trends["create"]

    @property
    def update_duration(self) -> Trend:
        return self._trends["update"]

    @property
    def patch_duration(self) -> Trend:
        return self._trends["patch"]

    @property
    def delete_duration(self) -> Trend:
        return self._trends["delete"]

    @property
    def trends(self) -> list[Trend]:
        """Return the step trends in execution order."""
        return list(self._trends.values())

    def record_request(self, metric: RequestMetric) -> None:
        """Add the request's latency to the trend of its step.

        Requests whose name is not a known step are ignored.

        Args:
            metric: The request metric emitted by ``HttpClient``.
        """
        trend = self._trends.get(metric.name)
        if trend is None:
            logger.debug("No trend for request %r, sample dropped", metric.name)
            return
        trend.add(metric.latency_ms)
        logger.debug(
            "%s %s -> %d in %.1fms",
            metric.method,
            metric.url,
            metric.status_code,
            metric.latency_ms,
        )

    def record_check(self, *, passed: bool) -> None:
        """Record the outcome of one step check."""
        if passed:
            self.successful_requests.add(1)
        self.failed_requests.add(not passed)
