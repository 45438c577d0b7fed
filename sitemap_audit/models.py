# sitemap_audit/models.py
"""
Data models for SitemapAudit: parsed sitemap documents and per-URL check results.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

__all__ = ("SitemapUrlEntry", "SitemapDocument", "CheckResult", "CrawlReport")


@dataclass(frozen=True, slots=True)
class SitemapUrlEntry:
    """One ``<url>`` element of a ``<urlset>``; ``lastmod`` is kept as raw text."""

    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[float] = None


@dataclass(frozen=True, slots=True)
class SitemapDocument:
    """A leaf sitemap: its URL (or label) and the entries in document order."""

    name: str
    urls: Tuple[SitemapUrlEntry, ...] = ()

    @property
    def locs(self) -> list[str]:
        return [entry.loc for entry in self.urls]


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of checking one URL.

    ``status_code == 0`` means no HTTP response was obtained; ``error`` then
    describes why. ``transient`` marks transport failures (timeouts, resets)
    that a later sweep may retry.
    """

    url: str
    status_code: int
    error: Optional[str] = None
    transient: bool = field(default=False, compare=False)


@dataclass(frozen=True, slots=True)
class CrawlReport:
    """A sitemap document paired with one result per entry, in the same order."""

    document: SitemapDocument
    results: Tuple[CheckResult, ...]

    def __post_init__(self) -> None:
        if len(self.results) != len(self.document.urls):
            raise ValueError(
                f"{self.document.name}: {len(self.results)} results for "
                f"{len(self.document.urls)} URLs"
            )

    def status_counts(self) -> Dict[int, int]:
        counts = Counter(r.status_code for r in self.results)
        return dict(sorted(counts.items()))
