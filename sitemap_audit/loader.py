# File: sitemap_audit/loader.py
"""sitemap_audit.loader: загрузка дерева sitemap (индексы раскрываются рекурсивно).

Корневой документ обязан загрузиться; сбой вложенного документа индекса
логируется как предупреждение, и этот документ просто не попадает в результат.
"""
from __future__ import annotations

import asyncio
import gzip
import zlib
from typing import List, Set

from aiohttp import ClientSession, ClientTimeout
from lxml import etree

from sitemap_audit.exceptions import SitemapFetchError, SitemapParseError
from sitemap_audit.logger import get_logger
from sitemap_audit.models import SitemapDocument
from sitemap_audit.parser.sitemap_parser import ParsedIndex, ParsedUrlset, parse_sitemap

__all__ = ["COMPRESSED_SUFFIXES", "fetch_sitemap_bytes", "fetch_sitemaps", "SitemapTreeLoader"]

log = get_logger("loader")

#: suffixes of sitemap files that are gzip-compressed on disk (not via Content-Encoding)
COMPRESSED_SUFFIXES = (".gz",)


async def fetch_sitemap_bytes(session: ClientSession, url: str, *, timeout: float) -> bytes:
    """Загружает документ и распаковывает его, если файл сжат."""
    async with session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
        if not 200 <= resp.status < 300:
            raise SitemapFetchError(url, resp.status)
        data = await resp.read()

    if url.lower().endswith(COMPRESSED_SUFFIXES):
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as exc:
            raise SitemapParseError(url, f"invalid gzip data: {exc}") from exc
    return data


class SitemapTreeLoader:
    """Разворачивает sitemap-индекс в плоский список листовых документов.

    Экземпляр хранит множество уже загруженных адресов текущего запуска,
    чтобы циклические ссылки между индексами не приводили к бесконечной рекурсии.

    Семафор ограничивает число одновременных загрузок и удерживается только на
    время запроса: таймаут запроса начинает отсчёт, когда слот уже получен,
    а рекурсивная загрузка вложенных индексов слот не держит.
    """

    def __init__(self, session: ClientSession, *, timeout: float, concurrency: int = 10) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.session = session
        self.timeout = timeout
        self._slots = asyncio.Semaphore(concurrency)
        self._seen: Set[str] = set()

    async def load(self, url: str) -> List[SitemapDocument]:
        """Загружает документ по *url*; ошибки корневого документа пробрасываются."""
        self._seen.add(url)
        async with self._slots:
            data = await fetch_sitemap_bytes(self.session, url, timeout=self.timeout)
        try:
            parsed = parse_sitemap(data)
        except (etree.XMLSyntaxError, ValueError) as exc:
            raise SitemapParseError(url, f"malformed XML: {exc}") from exc

        if isinstance(parsed, ParsedIndex):
            log.info("Sitemap index %s lists %d sitemap(s)", url, len(parsed.locs))
            return await self._load_children(url, parsed.locs)
        if isinstance(parsed, ParsedUrlset):
            log.info("Sitemap %s lists %d URL(s)", url, len(parsed.entries))
            return [SitemapDocument(name=url, urls=tuple(parsed.entries))]
        raise SitemapParseError(url, "document contains neither <urlset> nor <sitemapindex>")

    async def _load_children(self, index_url: str, locs: List[str]) -> List[SitemapDocument]:
        children: List[str] = []
        for loc in locs:
            if loc in self._seen:
                log.warning("Skipping sitemap %s listed again in %s", loc, index_url)
                continue
            self._seen.add(loc)
            children.append(loc)

        outcomes = await asyncio.gather(
            *(self.load(loc) for loc in children), return_exceptions=True
        )

        documents: List[SitemapDocument] = []
        for loc, outcome in zip(children, outcomes):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                log.warning("Failed to load sub-sitemap %s: %s", loc, _reason(outcome))
                continue
            documents.extend(outcome)
        return documents


def _reason(exc: BaseException) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return "request timed out"
    return str(exc) or exc.__class__.__name__


async def fetch_sitemaps(
    session: ClientSession, url: str, *, timeout: float = 10.0, concurrency: int = 10
) -> List[SitemapDocument]:
    """Возвращает листовые документы дерева sitemap с корнем *url*.

    *concurrency* должно совпадать с лимитом соединений сессии, иначе запросы
    ждут свободного соединения, пока идёт их таймаут.
    """
    loader = SitemapTreeLoader(session, timeout=timeout, concurrency=concurrency)
    return await loader.load(url)
