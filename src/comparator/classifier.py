"""
Response classifier that decides how two fetch outcomes are compared.

Fetch failures are part of the comparison result: one side being down, or
both sides failing differently, is reported as a diff rather than an error.
"""

import logging
from collections.abc import Sequence

from .differ import TextDiffer
from .extractor import HTMLExtractor
from .models import ComparisonError, DiffFragment, DiffKind, FetchOutcome, HTTPResponse
from .structural import JSONDiffer

logger = logging.getLogger(__name__)


def trim_error_host(message: str) -> str:
    """
    Strip the connection-specific prefix from an error message.

    Keeps everything from the last ``:`` on, e.g.
    ``dial tcp 127.0.0.1:80: connection refused`` -> ``: connection refused``.
    A message without ``:`` is returned unchanged.
    """
    index = message.rfind(":")
    if index == -1:
        return message
    return message[index:]


class ResponseComparator:
    """
    Compares the responses fetched for sides A and B.

    Without selectors the bodies are compared as JSON documents; with
    selectors they are parsed as HTML and the text of each selector's matches
    is compared.
    """

    def __init__(
        self,
        text_differ: TextDiffer | None = None,
        json_differ: JSONDiffer | None = None,
        extractor: HTMLExtractor | None = None,
    ) -> None:
        self.text_differ = text_differ or TextDiffer()
        self.json_differ = json_differ or JSONDiffer()
        self.extractor = extractor or HTMLExtractor()

    def compare(
        self,
        outcome_a: FetchOutcome,
        outcome_b: FetchOutcome,
        selectors: Sequence[str] | None = None,
    ) -> list[DiffFragment]:
        """
        Compare two fetch outcomes.

        Args:
            outcome_a: Fetch outcome for side A
            outcome_b: Fetch outcome for side B
            selectors: CSS selectors whose text to compare, or None to compare
                the bodies as JSON

        Returns:
            Ordered fragments; empty if no differences were found

        Raises:
            BodyReadError: If a response body cannot be read
            JSONParseError: If a body is not valid JSON (JSON comparison)
            HTMLParseError: If a body or selector cannot be parsed (HTML comparison)
            ComparisonError: If a successful outcome carries no response
        """
        if not outcome_a.succeeded and outcome_b.succeeded:
            logger.debug("Side A failed to fetch: %s", outcome_a.error)
            return [
                DiffFragment(trim_error_host(outcome_a.error), DiffKind.DELETION),
                DiffFragment(self._response(outcome_b).status_text, DiffKind.INSERTION),
            ]

        if outcome_a.succeeded and not outcome_b.succeeded:
            logger.debug("Side B failed to fetch: %s", outcome_b.error)
            return [
                DiffFragment(self._response(outcome_a).status_text, DiffKind.DELETION),
                DiffFragment(trim_error_host(outcome_b.error), DiffKind.INSERTION),
            ]

        if not outcome_a.succeeded and not outcome_b.succeeded:
            logger.debug("Both sides failed to fetch")
            return self.text_differ.diff(
                trim_error_host(outcome_a.error), trim_error_host(outcome_b.error)
            )

        body_a = self._response(outcome_a).body.read()
        body_b = self._response(outcome_b).body.read()

        if selectors is None:
            logger.debug("Comparing bodies as JSON")
            return self.json_differ.compare(body_a, body_b)

        logger.debug("Comparing HTML elements: %s", ", ".join(selectors))
        return self._compare_html(body_a, body_b, selectors)

    def _compare_html(
        self, body_a: bytes, body_b: bytes, selectors: Sequence[str]
    ) -> list[DiffFragment]:
        doc_a = self.extractor.parse(body_a)
        doc_b = self.extractor.parse(body_b)

        fragments: list[DiffFragment] = []
        for selector in selectors:
            text_a = self.extractor.extract_text(doc_a, selector)
            text_b = self.extractor.extract_text(doc_b, selector)
            fragments.extend(self.text_differ.diff(text_a, text_b))

        return fragments

    @staticmethod
    def _response(outcome: FetchOutcome) -> HTTPResponse:
        if outcome.response is None:
            raise ComparisonError(f"Fetch of {outcome.url} succeeded without a response")
        return outcome.response


def compare(
    outcome_a: FetchOutcome,
    outcome_b: FetchOutcome,
    selectors: Sequence[str] | None = None,
) -> list[DiffFragment]:
    """Compare two fetch outcomes with a default ResponseComparator."""
    return ResponseComparator().compare(outcome_a, outcome_b, selectors)
