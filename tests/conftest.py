"""Shared test fixtures for the crocload test suite."""

from __future__ import annotations

import asyncio
import socket
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pytest
from aiohttp import web

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


# =============================================================================
# Network utilities
# =============================================================================


def _get_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


# =============================================================================
# Fake crocodile API
# =============================================================================


@dataclass
class RecordedRequest:
    """One request received by the fake API."""

    step: str
    method: str
    path: str
    authorization: str | None
    body: dict[str, Any]


@dataclass
class FakeCrocodileApi:
    """State of the fake crocodile API.

    Tests tweak ``statuses`` (step name -> HTTP status) or the response
    bodies before running the scenario, then inspect ``requests``. A step
    listed in ``drops`` is recorded and then has its connection closed
    without a response. A step in ``delays`` answers after that many
    seconds. ``body_delay`` stalls the body of ``/slow-body/`` after its
    headers are sent.
    """

    token: str = "test-access-token"
    crocodile_id: int = 42
    statuses: dict[str, int] = field(default_factory=dict)
    login_body: dict[str, Any] | None = None
    create_body: dict[str, Any] | None = None
    requests: list[RecordedRequest] = field(default_factory=list)
    drops: set[str] = field(default_factory=set)
    delays: dict[str, float] = field(default_factory=dict)
    body_delay: float = 0.0
    base_url: str = ""

    @property
    def steps(self) -> list[str]:
        """Return the step names of received requests, in order."""
        return [r.step for r in self.requests]

    def status_for(self, step: str, default: int) -> int:
        return self.statuses.get(step, default)


SLOW_BODY = b"x" * 2048


async def _interfere(api: FakeCrocodileApi, request: web.Request, step: str) -> bool:
    """Apply the configured delay for *step*; return True if it must be dropped."""
    delay = api.delays.get(step, 0.0)
    if delay:
        await asyncio.sleep(delay)
    if step in api.drops:
        assert request.transport is not None
        request.transport.close()
        return True
    return False


def _error_response(status: int) -> web.Response:
    if status == 204:
        return web.Response(status=204)
    return web.json_response({"detail": f"simulated {status}"}, status=status)


def _create_crocodile_app(api: FakeCrocodileApi) -> web.Application:
    """Build the fake API app bound to *api*'s state."""

    async def login(request: web.Request) -> web.Response:
        form = await request.post()
        api.requests.append(
            RecordedRequest(
                step="login",
                method=request.method,
                path=request.path,
                authorization=request.headers.get("Authorization"),
                body=dict(form),
            )
        )
        if await _interfere(api, request, "login"):
            return web.Response()
        status = api.status_for("login", 200)
        if status != 200:
            return _error_response(status)
        body = api.login_body if api.login_body is not None else {
            "access": api.token,
            "refresh": "test-refresh-token",
        }
        return web.json_response(body, status=200)

    async def create(request: web.Request) -> web.Response:
        payload = await request.json()
        api.requests.append(
            RecordedRequest(
                step="create",
                method=request.method,
                path=request.path,
                authorization=request.headers.get("Authorization"),
                body=payload,
            )
        )
        if await _interfere(api, request, "create"):
            return web.Response()
        status = api.status_for("create", 201)
        if status != 201:
            return _error_response(status)
        body = api.create_body if api.create_body is not None else {
            "id": api.crocodile_id,
            **payload,
            "age": 23,
        }
        return web.json_response(body, status=201)

    async def crocodile(request: web.Request) -> web.Response:
        step = {"PUT": "update", "PATCH": "patch", "DELETE": "delete"}[request.method]
        payload = await request.json() if request.can_read_body else {}
        api.requests.append(
            RecordedRequest(
                step=step,
                method=request.method,
                path=request.path,
                authorization=request.headers.get("Authorization"),
                body=payload,
            )
        )
        if await _interfere(api, request, step):
            return web.Response()
        default = 204 if step == "delete" else 200
        status = api.status_for(step, default)
        if status == default == 204:
            return web.Response(status=204)
        if status == default:
            return web.json_response({"id": int(request.match_info["id"]), **payload})
        return _error_response(status)

    async def slow_body(request: web.Request) -> web.StreamResponse:
        resp = web.StreamResponse(status=200)
        resp.content_length = len(SLOW_BODY)
        await resp.prepare(request)
        await asyncio.sleep(api.body_delay)
        await resp.write(SLOW_BODY)
        await resp.write_eof()
        return resp

    app = web.Application()
    app.router.add_post("/auth/token/login/", login)
    app.router.add_post("/my/crocodiles/", create)
    app.router.add_route("PUT", "/my/crocodiles/{id}/", crocodile)
    app.router.add_route("PATCH", "/my/crocodiles/{id}/", crocodile)
    app.router.add_route("DELETE", "/my/crocodiles/{id}/", crocodile)
    app.router.add_post("/slow-body/", slow_body)
    return app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
async def crocodile_api() -> AsyncIterator[FakeCrocodileApi]:
    """Fake crocodile API running on the test's event loop.

    ``api.base_url`` is set to e.g. ``http://127.0.0.1:54321``.
    """
    api = FakeCrocodileApi()
    port = _get_free_port()
    runner = web.AppRunner(_create_crocodile_app(api))
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    api.base_url = f"http://127.0.0.1:{port}"
    yield api
    await runner.cleanup()


@pytest.fixture
def sync_crocodile_api() -> Iterator[FakeCrocodileApi]:
    """Fake crocodile API running in a background thread.

    For CLI tests, where ``asyncio.run`` blocks the main thread.
    """
    api = FakeCrocodileApi()
    port = _get_free_port()
    started = threading.Event()
    loop_holder: list[asyncio.AbstractEventLoop] = []

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        runner = web.AppRunner(_create_crocodile_app(api))
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", port)
        loop.run_until_complete(site.start())
        loop_holder.append(loop)
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=_thread_target, daemon=True)
    thread.start()
    started.wait(timeout=5.0)

    api.base_url = f"http://127.0.0.1:{port}"
    yield api

    if loop_holder:
        loop_holder[0].call_soon_threadsafe(loop_holder[0].stop)
    thread.join(timeout=5.0)


@pytest.fixture
def closed_port_url() -> str:
    """A base URL on which nothing is listening."""
    return f"http://127.0.0.1:{_get_free_port()}"
