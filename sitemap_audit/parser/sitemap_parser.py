# File: sitemap_audit/parser/sitemap_parser.py
"""sitemap_audit.parser.sitemap_parser: Модуль для разбора sitemap.xml и sitemap-индексов."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from lxml import etree

from sitemap_audit.logger import get_logger
from sitemap_audit.models import SitemapUrlEntry

log = get_logger("parser")


@dataclass(slots=True)
class ParsedIndex:
    """Содержимое <sitemapindex>: адреса вложенных sitemap в порядке документа."""

    locs: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ParsedUrlset:
    """Содержимое <urlset>: записи <url> в порядке документа."""

    entries: List[SitemapUrlEntry] = field(default_factory=list)


ParsedSitemap = Union[ParsedIndex, ParsedUrlset, None]


def _child_text(element: etree._Element, name: str) -> Optional[str]:
    child = element.find(f"{{*}}{name}")
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


def _parse_priority(raw: Optional[str], loc: str) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        log.debug("Ignoring non-numeric priority %r for %s", raw, loc)
        return None


def parse_url_entries(root: etree._Element) -> List[SitemapUrlEntry]:
    """Извлекает записи <url> из элемента <urlset>; записи без <loc> пропускаются."""
    entries: List[SitemapUrlEntry] = []
    for node in root.iterfind("{*}url"):
        loc = _child_text(node, "loc")
        if loc is None:
            log.debug("Skipping <url> without <loc>")
            continue
        entries.append(
            SitemapUrlEntry(
                loc=loc,
                lastmod=_child_text(node, "lastmod"),
                changefreq=_child_text(node, "changefreq"),
                priority=_parse_priority(_child_text(node, "priority"), loc),
            )
        )
    return entries


def parse_sitemap(xml_content: Union[str, bytes]) -> ParsedSitemap:
    """Разбирает XML sitemap.

    Args:
        xml_content: содержимое sitemap.xml (строка или байты).

    Returns:
        :class:`ParsedIndex` для <sitemapindex>, :class:`ParsedUrlset` для
        <urlset> и ``None``, если корневой элемент не распознан.

    Raises:
        etree.XMLSyntaxError: документ не является корректным XML.

    Пример:
    ```python
    from sitemap_audit.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        parsed = parse_sitemap(f.read())
    ```
    """
    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")
    parser = etree.XMLParser(ns_clean=True, resolve_entities=False, no_network=True)
    root = etree.fromstring(xml_content, parser=parser)

    tag = etree.QName(root).localname
    if tag == "sitemapindex":
        locs = [loc for loc in (_child_text(s, "loc") for s in root.iterfind("{*}sitemap")) if loc]
        return ParsedIndex(locs=locs)
    if tag == "urlset":
        return ParsedUrlset(entries=parse_url_entries(root))
    return None


__all__ = ["ParsedIndex", "ParsedUrlset", "ParsedSitemap", "parse_sitemap", "parse_url_entries"]
