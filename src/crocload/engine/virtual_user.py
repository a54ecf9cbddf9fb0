"""Single virtual user driver: N iterations of the scenario, back to back.

This is the smoke-test path. Spreading many virtual users over a stage
profile is left to whatever host executes the scenario.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from crocload._internal.logging import get_logger
from crocload.client.http_client import HttpClient
from crocload.scenario.crocodiles import CrocodileScenario

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from crocload._internal.config import CrocLoadConfig
    from crocload.metrics.scenario_metrics import ScenarioMetrics
    from crocload.scenario.crocodiles import IterationResult

logger = get_logger("engine.virtual_user")


async def run_virtual_user(
    config: CrocLoadConfig,
    metrics: ScenarioMetrics,
    *,
    vu_id: int = 1,
    iterations: int = 1,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> list[IterationResult]:
    """Run *iterations* sequential iterations for one virtual user.

    Args:
        config: Target URL, credentials, timeout and pause.
        metrics: Sink for durations and check outcomes.
        vu_id: Virtual user id embedded in resource names.
        iterations: Number of iterations to run. Must be >= 1.
        sleep: Coroutine used for the end-of-iteration pause.

    Returns:
        One ``IterationResult`` per iteration, in order.

    Raises:
        ValueError: If *iterations* is less than 1.
    """
    if iterations < 1:
        msg = f"iterations must be >= 1, got {iterations}"
        raise ValueError(msg)

    logger.info(
        "VU %d starting: %d iteration(s) against %s",
        vu_id,
        iterations,
        config.base_url,
    )

    results: list[IterationResult] = []
    async with HttpClient(
        base_url=config.base_url,
        metric_callback=metrics.record_request,
        vu_id=vu_id,
        timeout=config.request_timeout,
    ) as client:
        scenario = CrocodileScenario(
            client,
            metrics,
            username=config.username,
            password=config.password,
            pause_seconds=config.pause_seconds,
            sleep=sleep,
        )
        for iteration in range(iterations):
            results.append(await scenario.run_iteration(vu_id, iteration))

    logger.info(
        "VU %d finished: %d/%d iteration(s) fully passed",
        vu_id,
        sum(result.passed for result in results),
        len(results),
    )
    return results
