"""
HTML extractor for pulling the text of selected elements out of a page.
"""

import logging

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from .models import ComparisonError

logger = logging.getLogger(__name__)


class HTMLParseError(ComparisonError):
    """Exception raised when a document or selector cannot be parsed."""

    pass


class HTMLExtractor:
    """
    Extracts element text from HTML documents.

    Each response body is parsed once into a document tree; text is then
    extracted per CSS selector.
    """

    def __init__(self, parser: str = "lxml"):
        """
        Initialize the HTML extractor.

        Args:
            parser: BeautifulSoup tree builder to use
        """
        self.parser = parser

    def parse(self, body: bytes | str) -> BeautifulSoup:
        """
        Parse a response body into a document tree.

        Args:
            body: Raw HTML, as bytes (encoding is detected) or text

        Returns:
            Parsed document

        Raises:
            HTMLParseError: If the body cannot be parsed
        """
        try:
            return BeautifulSoup(body, self.parser)
        except Exception as e:
            raise HTMLParseError(f"Failed to parse HTML: {str(e)}") from e

    def extract_text(self, document: BeautifulSoup, selector: str) -> str:
        """
        Extract the text of all elements matching a selector.

        Args:
            document: Parsed document
            selector: CSS selector

        Returns:
            Concatenated descendant text of the matches in document order,
            or an empty string if nothing matches

        Raises:
            HTMLParseError: If the selector is invalid
        """
        try:
            elements = document.select(selector)
        except SelectorSyntaxError as e:
            raise HTMLParseError(f"Invalid selector {selector!r}: {str(e)}") from e

        logger.debug("Selector %r matched %d elements", selector, len(elements))
        return "".join(element.get_text() for element in elements)
