"""The crocodile CRUD scenario: login, create, update, patch, delete, pause.

One call to :meth:`CrocodileScenario.run_iteration` is one iteration of one
virtual user. Steps run strictly in order. Login and create gate everything
after them; update, patch and delete failures are recorded and the iteration
carries on. Nothing is retried and no step failure is raised.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import aiohttp

from crocload._internal.logging import get_logger
from crocload.scenario.payloads import create_payload, patch_payload, update_payload

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from crocload._internal.types import ResourceId
    from crocload.client.http_client import HttpClient
    from crocload.metrics.scenario_metrics import ScenarioMetrics

logger = get_logger("scenario.crocodiles")

LOGIN_PATH = "/auth/token/login/"
CROCODILES_PATH = "/my/crocodiles/"

# Errors that turn a step into a failed check instead of escaping the iteration.
_TRANSPORT_ERRORS = (aiohttp.ClientError, TimeoutError)


class Step(Enum):
    """Steps of one iteration, in execution order."""

    LOGIN = "login"
    CREATE = "create"
    UPDATE = "update"
    PATCH = "patch"
    DELETE = "delete"


@dataclass(frozen=True)
class _StepSpec:
    endpoint: str
    method: str
    expected_status: int
    check_name: str
    failure_message: str


_STEPS: dict[Step, _StepSpec] = {
    Step.LOGIN: _StepSpec("Login", "POST", 200, "login successful", "Login failed"),
    Step.CREATE: _StepSpec(
        "CreateCrocodile", "POST", 201, "created crocodile", "Create crocodile failed"
    ),
    Step.UPDATE: _StepSpec(
        "UpdateCrocodile", "PUT", 200, "updated crocodile", "Update crocodile failed"
    ),
    Step.PATCH: _StepSpec(
        "PatchCrocodile", "PATCH", 200, "patched crocodile", "Patch crocodile failed"
    ),
    Step.DELETE: _StepSpec(
        "DeleteCrocodile", "DELETE", 204, "deleted crocodile", "Delete crocodile failed"
    ),
}


@dataclass
class StepOutcome:
    """Result of one step check.

    Attributes:
        step: Which step ran.
        status_code: HTTP status, or 0 when the request raised.
        passed: Whether the step's check passed.
    """

    step: Step
    status_code: int
    passed: bool


@dataclass
class IterationResult:
    """What happened during one iteration.

    Attributes:
        vu: Virtual user id.
        iteration: Iteration index for this virtual user.
        outcomes: Step outcomes in execution order.
        token: Access token from login, None if login failed.
        crocodile_id: Id of the created crocodile, None if create failed.
        aborted: True when login or create failed and the remaining steps
            were skipped.
    """

    vu: int
    iteration: int
    outcomes: list[StepOutcome] = field(default_factory=list)
    token: str | None = None
    crocodile_id: ResourceId | None = None
    aborted: bool = False

    @property
    def steps(self) -> list[Step]:
        return [outcome.step for outcome in self.outcomes]

    @property
    def passed(self) -> bool:
        return not self.aborted and all(outcome.passed for outcome in self.outcomes)


class CrocodileScenario:
    """Runs the fixed CRUD sequence against the crocodile API.

    The scenario owns no metrics aggregation: it writes check outcomes into
    ``metrics`` and relies on the client's metric callback for durations.
    """

    def __init__(
        self,
        client: HttpClient,
        metrics: ScenarioMetrics,
        *,
        username: str,
        password: str,
        pause_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the scenario.

        Args:
            client: An open ``HttpClient`` bound to the API base URL.
            metrics: Sink for check outcomes.
            username: Login username.
            password: Login password.
            pause_seconds: Delay at the end of a completed iteration.
            sleep: Coroutine used for the pause; tests replace it.
        """
        self._client = client
        self._metrics = metrics
        self._username = username
        self._password = password
        self._pause_seconds = pause_seconds
        self._sleep = sleep

    async def run_iteration(self, vu: int, iteration: int) -> IterationResult:
        """Run one full iteration.

        Args:
            vu: Virtual user id, embedded in resource names.
            iteration: Iteration index, embedded in resource names.

        Returns:
            The outcomes of every step that ran.
        """
        result = IterationResult(vu=vu, iteration=iteration)

        try:
            token = await self._login(result)
            if token is None:
                result.aborted = True
                return result
            self._client.headers["Authorization"] = f"Bearer {token}"

            crocodile_id = await self._create(result)
            if crocodile_id is None:
                result.aborted = True
                return result

            path = f"{CROCODILES_PATH}{crocodile_id}/"
            await self._mutate(
                result, Step.UPDATE, self._client.put, path, json=update_payload(vu, iteration)
            )
            await self._mutate(
                result, Step.PATCH, self._client.patch, path, json=patch_payload(vu, iteration)
            )
            await self._mutate(result, Step.DELETE, self._client.delete, path)
        finally:
            # The token belongs to this iteration only
            self._client.headers.pop("Authorization", None)

        await self._sleep(self._pause_seconds)
        logger.debug(
            "Iteration %d of VU %d done: %d/%d checks passed",
            iteration,
            vu,
            sum(outcome.passed for outcome in result.outcomes),
            len(result.outcomes),
        )
        return result

    async def _login(self, result: IterationResult) -> str | None:
        resp = await self._send(
            result,
            Step.LOGIN,
            self._client.post,
            LOGIN_PATH,
            data={"username": self._username, "password": self._password},
        )
        status = resp.status if resp is not None else 0
        token: str | None = None
        if resp is not None:
            body = await self._read_json(resp)
            if status == 200 and isinstance(body, dict):
                access = body.get("access")
                if isinstance(access, str) and access:
                    token = access

        self._check(result, Step.LOGIN, status, passed=token is not None)
        result.token = token
        return token

    async def _create(self, result: IterationResult) -> ResourceId | None:
        resp = await self._send(
            result,
            Step.CREATE,
            self._client.post,
            CROCODILES_PATH,
            json=create_payload(result.vu, result.iteration),
        )
        status = resp.status if resp is not None else 0
        crocodile_id: ResourceId | None = None
        if resp is not None:
            body = await self._read_json(resp)
            if status == 201 and isinstance(body, dict):
                value = body.get("id")
                if isinstance(value, (int, str)) and value != "":
                    crocodile_id = value

        self._check(result, Step.CREATE, status, passed=crocodile_id is not None)
        result.crocodile_id = crocodile_id
        return crocodile_id

    async def _mutate(
        self,
        result: IterationResult,
        step: Step,
        call: Callable[..., Awaitable[aiohttp.ClientResponse]],
        path: str,
        **kwargs: object,
    ) -> None:
        resp = await self._send(result, step, call, path, **kwargs)
        status = resp.status if resp is not None else 0
        self._check(result, step, status, passed=status == _STEPS[step].expected_status)

    async def _send(
        self,
        result: IterationResult,
        step: Step,
        call: Callable[..., Awaitable[aiohttp.ClientResponse]],
        path: str,
        **kwargs: object,
    ) -> aiohttp.ClientResponse | None:
        spec = _STEPS[step]
        try:
            return await call(
                path,
                name=step.value,
                tags={"endpoint": spec.endpoint, "method": spec.method},
                **kwargs,
            )
        except _TRANSPORT_ERRORS as exc:
            logger.warning(
                "%s request raised %s: %s",
                spec.endpoint,
                type(exc).__name__,
                exc,
                extra={"vu": result.vu, "iteration": result.iteration, "step": step.value},
            )
            return None

    def _check(self, result: IterationResult, step: Step, status: int, *, passed: bool) -> None:
        spec = _STEPS[step]
        self._metrics.record_check(passed=passed)
        result.outcomes.append(StepOutcome(step=step, status_code=status, passed=passed))
        if not passed:
            logger.error(
                "%s (status=%d, vu=%d, iteration=%d)",
                spec.failure_message,
                status,
                result.vu,
                result.iteration,
                extra={
                    "vu": result.vu,
                    "iteration": result.iteration,
                    "step": step.value,
                    "status": status,
                },
            )
        else:
            logger.debug("Check %r passed", spec.check_name)

    @staticmethod
    async def _read_json(resp: aiohttp.ClientResponse) -> object:
        """Return the decoded JSON body, or None if it is missing or malformed."""
        try:
            return await resp.json(content_type=None)
        except (*_TRANSPORT_ERRORS, ValueError):
            return None
