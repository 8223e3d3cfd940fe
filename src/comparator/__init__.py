"""
HTTP Response Comparator.

Core engine for comparing the responses of two URLs that are expected to
serve the same content, e.g. staging and production. Designed to be reusable
by the CLI and by any other caller.
"""

# Core models
# Comparison engine
# Main orchestrator
from .classifier import ResponseComparator, compare, trim_error_host
from .differ import TextDiffer
from .extractor import HTMLExtractor, HTMLParseError
from .models import (
    BodyReadError,
    ComparisonError,
    ComparisonReport,
    DiffFragment,
    DiffKind,
    FetchOutcome,
    HTTPResponse,
    ResponseBody,
    URLInput,
)
from .runner import ComparisonRunner
from .structural import JSONDiffer, JSONParseError

__all__ = [
    # Models
    "DiffFragment",
    "DiffKind",
    "FetchOutcome",
    "HTTPResponse",
    "ResponseBody",
    "ComparisonReport",
    "URLInput",
    # Errors
    "ComparisonError",
    "BodyReadError",
    "JSONParseError",
    "HTMLParseError",
    # Engines
    "TextDiffer",
    "JSONDiffer",
    "HTMLExtractor",
    "ResponseComparator",
    "compare",
    "trim_error_host",
    # Main entry point
    "ComparisonRunner",
]
