# sitemap_audit/checker/probe.py
"""
Single-URL check: cheap ``HEAD`` first, ``GET`` when the server rejects it.
"""
from __future__ import annotations

import asyncio

from aiohttp import (
    ClientConnectorError,
    ClientOSError,
    ClientSession,
    ClientSSLError,
    ServerDisconnectedError,
    ServerTimeoutError,
)

from sitemap_audit.checker.redirects import fetch_with_redirects
from sitemap_audit.logger import get_logger
from sitemap_audit.models import CheckResult

log = get_logger("checker")

#: statuses for which a HEAD answer is not trusted and GET is issued instead
FALLBACK_STATUSES: frozenset[int] = frozenset({403, 405})

#: transport failures (TLS handshake errors included) a later sweep may retry
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    asyncio.TimeoutError,
    ServerTimeoutError,
    ServerDisconnectedError,
    ClientConnectorError,
    ClientSSLError,
    ClientOSError,
    ConnectionResetError,
)


def _describe(exc: BaseException, timeout: float) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return f"Request timed out after {timeout:g}s"
    return str(exc) or exc.__class__.__name__


async def check_url(
    session: ClientSession,
    url: str,
    *,
    timeout: float,
    max_redirects: int,
) -> CheckResult:
    """Check *url* and return its final status; never raises for network faults."""
    try:
        status = await fetch_with_redirects(
            session, url, "HEAD", timeout=timeout, max_redirects=max_redirects
        )
        if status in FALLBACK_STATUSES:
            log.debug("HEAD %s -> %d, retrying with GET", url, status)
            status = await fetch_with_redirects(
                session, url, "GET", timeout=timeout, max_redirects=max_redirects
            )
        return CheckResult(url=url, status_code=status)
    except Exception as exc:
        log.debug("Check failed for %s: %r", url, exc)
        return CheckResult(
            url=url,
            status_code=0,
            error=_describe(exc, timeout),
            transient=isinstance(exc, TRANSIENT_ERRORS),
        )


__all__ = ["check_url", "FALLBACK_STATUSES", "TRANSIENT_ERRORS"]
