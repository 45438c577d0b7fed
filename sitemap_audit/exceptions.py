# sitemap_audit/exceptions.py
"""
Error types raised while loading sitemaps and running an audit.

Per-URL check failures are never raised: they are captured in
:class:`sitemap_audit.models.CheckResult`.
"""
from __future__ import annotations


class SitemapAuditError(Exception):
    """Base class for all SitemapAudit errors."""


class SitemapFetchError(SitemapAuditError):
    """A sitemap document answered with a non-success HTTP status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"Failed to fetch {url}: HTTP {status}")
        self.url = url
        self.status = status


class SitemapParseError(SitemapAuditError, ValueError):
    """A sitemap document could not be decoded or has an unknown root element."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to parse {url}: {reason}")
        self.url = url
        self.reason = reason


class NoSitemapsError(SitemapAuditError):
    """The sitemap tree resolved to zero documents."""

    def __init__(self, url: str) -> None:
        super().__init__(f"No sitemaps found at {url}")
        self.url = url


__all__ = ["SitemapAuditError", "SitemapFetchError", "SitemapParseError", "NoSitemapsError"]
