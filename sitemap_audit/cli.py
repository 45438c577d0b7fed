# === FILE: sitemap_audit/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска аудита SitemapAudit через командную строку.

Команды:
  audit URL  Загрузить sitemap (или sitemap-индекс) и проверить HTTP-статус каждого URL
  config     Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию — встроенные значения)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)

Команда audit опции:
  -c, --concurrency N   Максимум одновременных запросов
  -t, --timeout SEC     Таймаут одного запроса
  -r, --max-redirects N Максимум редиректов на URL
  --max-retries N       Число повторных проходов по временным ошибкам
  -d, --delay SEC       Пауза между запусками запросов
  --retry-delay SEC     Пауза перед повторным проходом
  -p, --proxy-url URL   Адрес прокси (имеет приоритет над окружением)
  --csv PATH            Сохранить CSV-отчёт
  --json PATH           Сохранить JSON-отчёт
  -v, --verbose         Показать каждый URL, а не только сводку

Прокси включается переменной окружения SITEMAP_AUDIT_PROXY_KEY или ZYTE_API_KEY
(можно в файле .env).

Пример:
  sitemap-audit audit https://example.com/sitemap.xml -c 20 --csv report.csv
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import click
from aiohttp import ClientError

from sitemap_audit import __version__
from sitemap_audit.config import AuditConfig, load_config
from sitemap_audit.engine import run_audit
from sitemap_audit.exceptions import SitemapAuditError
from sitemap_audit.logger import init_logging
from sitemap_audit.models import CheckResult, SitemapDocument
from sitemap_audit.report.console import print_report
from sitemap_audit.report.csv_report import write_csv_report
from sitemap_audit.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


class ProgressBars:
    """Один click.progressbar на документ; повторные проходы удлиняют текущий."""

    def __init__(self) -> None:
        self._bar = None

    def __call__(self, document: SitemapDocument) -> ProgressBars:
        self.close()
        self._bar = click.progressbar(
            length=len(document.urls),
            label=document.name,
            show_pos=True,
            file=sys.stderr,
        )
        self._bar.update(0)
        return self

    def url_checked(self, result: CheckResult) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def retry_started(self, attempt: int, count: int) -> None:
        if self._bar is not None:
            self._bar.length += count
            self._bar.label = f"{self._bar.label.split(' [')[0]} [retry {attempt}]"
            self._bar.update(0)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.render_finish()
            self._bar = None


def _announce(documents: List[SitemapDocument]) -> None:
    total = sum(len(d.urls) for d in documents)
    click.secho(f"Found {len(documents)} sitemap(s) with {total} total URLs", fg='cyan')
    click.echo("")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', message='SitemapAudit, version %(version)s')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """Группа команд SitemapAudit CLI."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('audit', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--concurrency', '-c', type=click.IntRange(min=1), default=None,
              help='Максимум одновременных запросов')
@click.option('--timeout', '-t', type=click.FloatRange(min=1), default=None,
              help='Таймаут одного запроса (секунд)')
@click.option('--max-redirects', '-r', type=click.IntRange(min=1), default=None,
              help='Максимум редиректов на URL')
@click.option('--max-retries', type=click.IntRange(min=0), default=None,
              help='Число повторных проходов по временным ошибкам')
@click.option('--delay', '-d', type=click.FloatRange(min=0), default=None,
              help='Пауза между запусками запросов (секунд)')
@click.option('--retry-delay', type=click.FloatRange(min=0), default=None,
              help='Пауза перед повторным проходом (секунд)')
@click.option('--proxy-url', '-p', default=None,
              help='Адрес прокси (по умолчанию http://proxy.zyte.com:8011, если задан ключ)')
@click.option('--csv', 'csv_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить CSV-отчёт в файл')
@click.option('--json', 'json_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить JSON-отчёт в файл')
@click.option('--verbose', '-v', is_flag=True, help='Показать каждый URL, а не только сводку')
@click.pass_context
def audit(ctx, url, concurrency, timeout, max_redirects, max_retries, delay, retry_delay,
          proxy_url, csv_output, json_output, verbose):
    """Проверить HTTP-статус каждого URL из sitemap по адресу URL."""
    base: AuditConfig = ctx.obj['config']
    try:
        cfg = base.override(
            concurrency=concurrency,
            timeout=timeout,
            max_redirects=max_redirects,
            max_retries=max_retries,
            delay=delay,
            retry_delay=retry_delay,
        ).with_env().override(proxy_url=proxy_url)
    except ValueError as e:
        print_error(f'Некорректные параметры: {e}')

    if cfg.proxy_url:
        click.secho(f'Proxy active: {cfg.proxy_url}', fg='cyan')
    click.secho(f'Fetching sitemap: {url}', fg='cyan')

    bars = ProgressBars()
    try:
        reports = asyncio.run(run_audit(cfg, url, progress_factory=bars, on_documents=_announce))
    except SitemapAuditError as e:
        print_error(f'Fatal: {e}')
    except (ClientError, asyncio.TimeoutError) as e:
        print_error(f'Fatal: could not load {url}: {str(e) or e.__class__.__name__}')
    finally:
        bars.close()

    print_report(reports, verbose)

    if csv_output:
        try:
            saved = write_csv_report(reports, csv_output)
            click.secho(f'CSV report written to {saved}', fg='green')
        except OSError as e:
            print_error(f'Ошибка при сохранении CSV: {e}')

    if json_output:
        try:
            saved = render_json(reports, json_output)
            click.secho(f'JSON report written to {saved}', fg='green')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON (ключ прокси скрыт)."""
    cfg: AuditConfig = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2, exclude={'proxy_api_key'}))


def main(argv: Optional[List[str]] = None) -> None:
    cli(args=argv)


if __name__ == "__main__":
    main()
