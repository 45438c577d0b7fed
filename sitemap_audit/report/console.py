# sitemap_audit/report/console.py
"""Вывод результатов аудита в терминал (цвета через click)."""
from __future__ import annotations

from typing import Sequence

import click

from sitemap_audit.models import CrawlReport


def status_label(code: int) -> str:
    """Цветная метка статуса: 0 → ERR, 2xx зелёный, 3xx жёлтый, остальное красный."""
    if code == 0:
        return click.style("ERR", fg="red")
    if 200 <= code < 300:
        return click.style(str(code), fg="green")
    if 300 <= code < 400:
        return click.style(str(code), fg="yellow")
    return click.style(str(code), fg="red")


def format_summary(report: CrawlReport) -> str:
    parts = [f"{status_label(code)}: {count}" for code, count in report.status_counts().items()]
    return f"  Total: {len(report.results)} URLs - {', '.join(parts)}"


def print_report(reports: Sequence[CrawlReport], verbose: bool = False) -> None:
    """Печатает сводку по каждому sitemap; с *verbose* — ещё и каждый URL."""
    click.echo("")
    click.secho("=== Crawl Results ===", bold=True)
    click.echo("")

    for report in reports:
        click.secho(report.document.name, bold=True, underline=True)

        if verbose:
            for r in report.results:
                suffix = click.style(f" ({r.error})", dim=True) if r.error else ""
                click.echo(f"  {status_label(r.status_code)}  {r.url}{suffix}")
            click.echo("")

        click.echo(format_summary(report))
        click.echo("")


__all__ = ["status_label", "format_summary", "print_report"]
