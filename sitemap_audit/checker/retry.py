# sitemap_audit/checker/retry.py
"""
Retry sweeps: a full first pass, then bounded passes over the URLs whose
outcome was transient, until nothing is retryable or attempts run out.
"""
from __future__ import annotations

import asyncio
import time
from typing import Collection, List, Optional, Sequence

from aiohttp import ClientSession

from sitemap_audit.checker.probe import check_url
from sitemap_audit.checker.runner import run_bounded
from sitemap_audit.config import AuditConfig
from sitemap_audit.logger import get_logger
from sitemap_audit.models import CheckResult
from sitemap_audit.progress import NullProgress, ProgressSink

__all__ = ("DEFAULT_RETRY_STATUSES", "is_retryable", "RetryCoordinator")

#: HTTP statuses treated as transient unless the config says otherwise
DEFAULT_RETRY_STATUSES: tuple[int, ...] = (503,)


def is_retryable(result: CheckResult, retry_statuses: Collection[int] = DEFAULT_RETRY_STATUSES) -> bool:
    """True for a transient HTTP status or a transient transport failure."""
    if result.status_code in retry_statuses:
        return True
    return result.status_code == 0 and result.transient


class RetryCoordinator:
    """Runs the sweeps for one audit; holds the session, settings and progress sink."""

    def __init__(
        self,
        session: ClientSession,
        config: AuditConfig,
        progress: Optional[ProgressSink] = None,
    ) -> None:
        self.session = session
        self.config = config
        self.progress: ProgressSink = progress or NullProgress()
        self.logger = get_logger("retry")

    async def check_all(self, urls: Sequence[str]) -> List[CheckResult]:
        """Return one final :class:`CheckResult` per URL, in input order."""
        start = time.monotonic()
        results = await self._sweep(urls)

        attempt = 0
        while attempt < self.config.max_retries:
            pending = [i for i, r in enumerate(results) if is_retryable(r, self.config.retry_statuses)]
            if not pending:
                break
            attempt += 1
            self.progress.retry_started(attempt, len(pending))
            self.logger.debug(
                "Attempt %d/%d: %d URL(s) after %.2f s",
                attempt, self.config.max_retries, len(pending), self.config.retry_delay,
            )
            await asyncio.sleep(self.config.retry_delay)
            retried = await self._sweep([urls[i] for i in pending])
            for index, result in zip(pending, retried):
                results[index] = result

        self.logger.info(
            "Checked %d URL(s) in %.2f s (%d retry sweep(s))",
            len(results), time.monotonic() - start, attempt,
        )
        return results

    async def _sweep(self, urls: Sequence[str]) -> List[CheckResult]:
        outcomes = await run_bounded(
            urls,
            self._check,
            concurrency=self.config.concurrency,
            delay=self.config.delay,
            on_complete=self.progress.url_checked,
        )
        # check_url captures its own failures; anything else is a programming error
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(outcomes)

    async def _check(self, url: str) -> CheckResult:
        return await check_url(
            self.session,
            url,
            timeout=self.config.timeout,
            max_redirects=self.config.max_redirects,
        )
