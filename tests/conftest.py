# File: tests/conftest.py
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web

from sitemap_audit.config import AuditConfig

ServeApp = Callable[[web.Application], Awaitable[str]]


@pytest.fixture(autouse=True)
def reset_project_logger():
    """
    CLI tests call init_logging(), which stops propagation to the root logger.
    Restore the defaults so caplog keeps seeing project records.
    """
    lg = logging.getLogger("SitemapAudit")
    yield
    lg.handlers.clear()
    lg.setLevel(logging.NOTSET)
    lg.propagate = True


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch):
    # setenv first so monkeypatch also undoes values loaded from .env files
    for name in ("SITEMAP_AUDIT_PROXY_KEY", "SITEMAP_AUDIT_PROXY_URL", "ZYTE_API_KEY"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[ServeApp]:
    """Start aiohttp applications on free ports; return their base URLs; clean up afterwards."""
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[ClientSession]:
    async with ClientSession() as s:
        yield s


def fast_config(**overrides) -> AuditConfig:
    """
    Build an AuditConfig without validation so tests can use sub-second
    timeouts and zero delays.
    """
    values = dict(concurrency=5, timeout=2.0, max_redirects=3, max_retries=2, delay=0.0, retry_delay=0.0)
    values.update(overrides)
    return AuditConfig.model_construct(**values)


class RecordingProgress:
    """Progress sink that remembers every notification."""

    def __init__(self) -> None:
        self.checked = []
        self.retries = []

    def url_checked(self, result) -> None:
        self.checked.append(result)

    def retry_started(self, attempt: int, count: int) -> None:
        self.retries.append((attempt, count))
