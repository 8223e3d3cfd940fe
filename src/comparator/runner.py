"""
Comparison runner for orchestrating fetch and comparison of one URL pair.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime

import httpx

from .classifier import ResponseComparator
from .fetcher import HTTPFetcher
from .models import ComparisonError, ComparisonReport, URLInput

logger = logging.getLogger(__name__)


class ComparisonRunner:
    """
    Fetches two URLs and compares the responses.

    Designed to be reusable by the CLI and by any other caller that wants a
    complete report rather than raw fragments.
    """

    def __init__(
        self,
        fetch_timeout: int = 30000,
        user_agent: str | None = None,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the comparison runner.

        Args:
            fetch_timeout: Timeout for each HTTP fetch in milliseconds
            user_agent: Custom User-Agent header (optional)
            follow_redirects: Whether to follow HTTP redirects
            transport: httpx transport to send requests through (optional)
        """
        self.fetch_timeout = fetch_timeout

        self.fetcher = HTTPFetcher(
            user_agent=user_agent,
            follow_redirects=follow_redirects,
            transport=transport,
        )
        self.comparator = ResponseComparator()

    async def run_async(
        self, url_a: str, url_b: str, selectors: Sequence[str] | None = None
    ) -> ComparisonReport:
        """
        Compare two URLs asynchronously.

        Both URLs are fetched concurrently; the comparison itself runs after
        both fetches have completed.

        Args:
            url_a: URL for side A
            url_b: URL for side B
            selectors: CSS selectors to compare, or None to compare as JSON

        Returns:
            ComparisonReport with the fragments or the error that aborted the comparison

        Raises:
            ValueError: If either URL is invalid
        """
        URLInput(url_a)
        URLInput(url_b)

        started_at = datetime.now()

        outcome_a, outcome_b = await asyncio.gather(
            self.fetcher.fetch(url_a, timeout=self.fetch_timeout),
            self.fetcher.fetch(url_b, timeout=self.fetch_timeout),
        )

        report = ComparisonReport(
            url_a=url_a,
            url_b=url_b,
            status_a=outcome_a.status_text,
            status_b=outcome_b.status_text,
            selectors=list(selectors) if selectors is not None else None,
            started_at=started_at,
        )

        try:
            report.fragments = self.comparator.compare(outcome_a, outcome_b, selectors)
        except ComparisonError as e:
            logger.warning("Comparison of %s and %s failed: %s", url_a, url_b, e)
            report.error = str(e)

        report.finished_at = datetime.now()
        return report

    def run(
        self, url_a: str, url_b: str, selectors: Sequence[str] | None = None
    ) -> ComparisonReport:
        """
        Compare two URLs synchronously.

        Convenience method that wraps run_async.
        """
        return asyncio.run(self.run_async(url_a, url_b, selectors))
