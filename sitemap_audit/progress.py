# sitemap_audit/progress.py
"""Progress notifications emitted while URLs are checked."""
from __future__ import annotations

from typing import Protocol

from sitemap_audit.logger import get_logger
from sitemap_audit.models import CheckResult

log = get_logger("progress")


class ProgressSink(Protocol):
    """Receives one call per finished URL check and one per retry sweep."""

    def url_checked(self, result: CheckResult) -> None: ...

    def retry_started(self, attempt: int, count: int) -> None: ...


class NullProgress:
    """Ignores every notification."""

    def url_checked(self, result: CheckResult) -> None:
        pass

    def retry_started(self, attempt: int, count: int) -> None:
        pass


class LoggingProgress(NullProgress):
    """Reports retry sweeps and failed checks through the project logger."""

    def url_checked(self, result: CheckResult) -> None:
        if result.status_code == 0:
            log.debug("%s: %s", result.url, result.error)

    def retry_started(self, attempt: int, count: int) -> None:
        log.info("Retry attempt %d: re-checking %d URL(s)", attempt, count)


__all__ = ["ProgressSink", "NullProgress", "LoggingProgress"]
