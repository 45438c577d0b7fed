# sitemap_audit/checker/redirects.py
"""
Manual redirect following: one request per hop, relative ``Location``
targets resolved against the URL of the hop that returned them.
"""
from __future__ import annotations

from typing import Literal
from urllib.parse import urljoin

from aiohttp import ClientSession, ClientTimeout

from sitemap_audit.logger import get_logger

log = get_logger("checker")

Method = Literal["HEAD", "GET"]


async def fetch_with_redirects(
    session: ClientSession,
    url: str,
    method: Method,
    *,
    timeout: float,
    max_redirects: int,
) -> int:
    """
    Issue *method* against *url*, following up to *max_redirects* redirects.

    Returns the final HTTP status. When the hop limit is exceeded the status
    of the last redirect response is returned as-is. Timeouts and transport
    errors propagate to the caller.
    """
    current = url
    hops = 0
    request_timeout = ClientTimeout(total=timeout)

    while True:
        async with session.request(
            method, current, allow_redirects=False, timeout=request_timeout
        ) as resp:
            status = resp.status
            location = resp.headers.get("Location")

        if not (300 <= status < 400 and location):
            return status

        hops += 1
        if hops > max_redirects:
            log.debug("%s %s: redirect limit %d exceeded", method, url, max_redirects)
            return status
        target = urljoin(current, location)
        log.debug("%s %s -> %d %s", method, current, status, target)
        current = target


__all__ = ["fetch_with_redirects", "Method"]
