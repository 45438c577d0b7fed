# sitemap_audit/report/csv_report.py
"""
Генерация CSV-отчёта: одна строка на проверенный URL, заголовок выводится всегда.
"""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, Union

from sitemap_audit.models import CrawlReport

CSV_COLUMNS = ("sitemap", "url", "status_code", "error")


def generate_csv(reports: Iterable[CrawlReport]) -> str:
    """Сериализует отчёты в CSV-строку (колонки :data:`CSV_COLUMNS`)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for report in reports:
        for result in report.results:
            writer.writerow(
                (report.document.name, result.url, result.status_code, result.error or "")
            )
    return buffer.getvalue()


def write_csv_report(reports: Iterable[CrawlReport], output_path: Union[Path, str]) -> Path:
    """
    Сохраняет CSV-отчёт по указанному пути.

    :param reports: список CrawlReport
    :param output_path: путь к CSV-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(generate_csv(reports), encoding="utf-8")
    return output


__all__ = ["CSV_COLUMNS", "generate_csv", "write_csv_report"]
