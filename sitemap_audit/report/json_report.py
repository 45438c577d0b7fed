# sitemap_audit/report/json_report.py

"""
Генерация JSON-отчёта для проекта SitemapAudit.

Сериализация списка CrawlReport в файл.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from sitemap_audit.models import CrawlReport


def reports_to_dict(reports: Sequence[CrawlReport]) -> Dict[str, Any]:
    """Преобразует отчёты в структуру, пригодную для json.dump."""
    sitemaps: List[Dict[str, Any]] = []
    for report in reports:
        sitemaps.append(
            {
                "sitemap": report.document.name,
                "total": len(report.results),
                "status_counts": {str(code): n for code, n in report.status_counts().items()},
                "results": [
                    {
                        "url": r.url,
                        "status_code": r.status_code,
                        "error": r.error,
                    }
                    for r in report.results
                ],
            }
        )
    return {"sitemaps": sitemaps}


def render_json(reports: Sequence[CrawlReport], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт в формате JSON по указанному пути.

    :param reports: список CrawlReport с результатами проверки
    :param output_path: путь к JSON-файлу
    :param pretty: форматировать с отступом 2
    :return: Path сохранённого файла

    Пример:
    ```python
    from sitemap_audit.report.json_report import render_json
    report_path = render_json(reports, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(reports_to_dict(reports), f, ensure_ascii=False, indent=2 if pretty else None)

    return output


__all__ = ["reports_to_dict", "render_json"]
