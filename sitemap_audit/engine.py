# File: sitemap_audit/engine.py
"""sitemap_audit.engine: оркестрация аудита — загрузка дерева sitemap и проверка URL."""

from __future__ import annotations

import time
from typing import Callable, List, Optional

from sitemap_audit.checker.retry import RetryCoordinator
from sitemap_audit.config import AuditConfig
from sitemap_audit.exceptions import NoSitemapsError
from sitemap_audit.http import create_session
from sitemap_audit.loader import fetch_sitemaps
from sitemap_audit.logger import logger
from sitemap_audit.models import CrawlReport, SitemapDocument
from sitemap_audit.progress import LoggingProgress, ProgressSink

__all__ = ["ProgressFactory", "run_audit", "check_documents"]

#: builds a progress sink for each document before its URLs are checked
ProgressFactory = Callable[[SitemapDocument], ProgressSink]


async def check_documents(
    coordinator_factory: Callable[[ProgressSink], RetryCoordinator],
    documents: List[SitemapDocument],
    progress_factory: Optional[ProgressFactory] = None,
) -> List[CrawlReport]:
    """Проверяет документы по очереди и собирает CrawlReport в порядке документов."""
    reports: List[CrawlReport] = []
    for document in documents:
        sink = progress_factory(document) if progress_factory else LoggingProgress()
        coordinator = coordinator_factory(sink)
        results = await coordinator.check_all(document.locs)
        reports.append(CrawlReport(document=document, results=tuple(results)))
    return reports


async def run_audit(
    config: AuditConfig,
    url: str,
    progress_factory: Optional[ProgressFactory] = None,
    on_documents: Optional[Callable[[List[SitemapDocument]], None]] = None,
) -> List[CrawlReport]:
    """
    Загружает sitemap по *url* и проверяет все найденные URL.

    Raises:
        SitemapFetchError / SitemapParseError: корневой документ не загружен.
        NoSitemapsError: дерево не содержит ни одного документа.
    """
    logger.info("Fetching sitemap: %s", url)
    start = time.monotonic()

    async with create_session(config) as session:
        documents = await fetch_sitemaps(
            session, url, timeout=config.timeout, concurrency=config.concurrency
        )
        if not documents:
            raise NoSitemapsError(url)

        total = sum(len(d.urls) for d in documents)
        logger.info("Found %d sitemap(s) with %d total URLs", len(documents), total)
        if on_documents is not None:
            on_documents(documents)

        reports = await check_documents(
            lambda sink: RetryCoordinator(session, config, sink),
            documents,
            progress_factory,
        )

    logger.info("Audit finished in %.2f s", time.monotonic() - start)
    return reports
