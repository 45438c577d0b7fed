"""sitemap_audit.checker: concurrent URL checking (redirects, HEAD/GET fallback, retry sweeps)."""

from sitemap_audit.checker.probe import check_url
from sitemap_audit.checker.redirects import fetch_with_redirects
from sitemap_audit.checker.retry import RetryCoordinator, is_retryable
from sitemap_audit.checker.runner import run_bounded

__all__ = ["check_url", "fetch_with_redirects", "RetryCoordinator", "is_retryable", "run_bounded"]
