"""
HTTP fetcher for retrieving the two sides of a comparison.

Fetch failures are returned as part of the outcome instead of being raised,
since a side that cannot be reached is itself a comparison result.
"""

import logging

import httpx

from .models import FetchOutcome, HTTPResponse, ResponseBody

logger = logging.getLogger(__name__)


class HTTPFetcher:
    """
    Fetches URLs with httpx.

    Follows redirects and captures response metadata. The body is streamed and
    fully drained before the connection is released; a failure while reading
    it is kept on the body so that it surfaces when the body is consumed.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the HTTP fetcher.

        Args:
            user_agent: Custom User-Agent header (optional)
            follow_redirects: Whether to follow HTTP redirects
            transport: httpx transport to send requests through (optional)
        """
        self.user_agent = user_agent or "http-response-comparator/1.0"
        self.follow_redirects = follow_redirects
        self.transport = transport

    async def fetch(self, url: str, timeout: int = 30000) -> FetchOutcome:
        """
        Fetch a URL.

        Args:
            url: The URL to fetch
            timeout: Timeout in milliseconds

        Returns:
            FetchOutcome with the response on success, or the error message on failure
        """
        timeout_seconds = timeout / 1000.0

        try:
            async with httpx.AsyncClient(
                follow_redirects=self.follow_redirects,
                timeout=timeout_seconds,
                headers={"User-Agent": self.user_agent},
                transport=self.transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    body = await self._read_body(response, timeout)

                    logger.debug("Fetched %s: %d", url, response.status_code)
                    return FetchOutcome(
                        url=url,
                        response=HTTPResponse(
                            url=str(response.url),
                            status_code=response.status_code,
                            reason_phrase=response.reason_phrase,
                            headers=dict(response.headers),
                            body=body,
                        ),
                    )

        except httpx.TimeoutException:
            error = f"Timeout after {timeout}ms"
        except httpx.HTTPError as e:
            error = str(e) or type(e).__name__
        except Exception as e:
            error = f"Unexpected error: {str(e)}"

        logger.warning("Failed to fetch %s: %s", url, error)
        return FetchOutcome(url=url, error=error)

    async def _read_body(self, response: httpx.Response, timeout: int) -> ResponseBody:
        """
        Drain the response stream.

        Args:
            response: Streaming response
            timeout: Timeout in milliseconds, for the error message

        Returns:
            ResponseBody holding the content or the read error
        """
        try:
            return ResponseBody(await response.aread())
        except httpx.TimeoutException:
            error = f"Body read timeout after {timeout}ms"
        except httpx.HTTPError as e:
            error = f"Body read error: {str(e) or type(e).__name__}"

        logger.warning("Failed to read body of %s: %s", response.url, error)
        return ResponseBody.failed(error)
