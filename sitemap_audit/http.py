# sitemap_audit/http.py
"""
HTTP transport setup: one aiohttp session per audit run, optionally routed
through an upstream proxy with basic-auth credentials.
"""
from __future__ import annotations

from aiohttp import BasicAuth, ClientSession, ClientTimeout, TCPConnector

from sitemap_audit.config import AuditConfig
from sitemap_audit.logger import get_logger

log = get_logger("http")


def create_session(config: AuditConfig) -> ClientSession:
    """Build the session used for both sitemap downloads and URL checks.

    Per-request timeouts are passed at call sites; the session-wide timeout
    is disabled so a long audit is never cut short. The connector pool is
    sized to the concurrency cap.
    """
    proxy_auth = None
    if config.proxy_url and config.proxy_api_key:
        proxy_auth = BasicAuth(config.proxy_api_key, "")
    if config.proxy_url:
        log.info("Routing requests through proxy %s", config.proxy_url)

    return ClientSession(
        timeout=ClientTimeout(total=None),
        headers={"User-Agent": config.user_agent},
        connector=TCPConnector(limit=config.concurrency),
        proxy=config.proxy_url,
        proxy_auth=proxy_auth,
        raise_for_status=False,
    )


__all__ = ["create_session"]
