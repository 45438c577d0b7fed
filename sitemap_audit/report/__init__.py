"""sitemap_audit.report: вывод результатов аудита (терминал, CSV, JSON)."""

from __future__ import annotations

from sitemap_audit.report.console import print_report
from sitemap_audit.report.csv_report import generate_csv, write_csv_report
from sitemap_audit.report.json_report import render_json

__all__ = ["print_report", "generate_csv", "write_csv_report", "render_json"]
