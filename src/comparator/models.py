"""
Core data models for the HTTP response comparator.

All models are plain data structures shared by the comparison engine, the
fetch layer and the CLI.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ComparisonError(Exception):
    """Base exception for failures that abort a comparison."""

    pass


class BodyReadError(ComparisonError):
    """Exception raised when a response body cannot be read."""

    pass


class DiffKind(Enum):
    """Type of a diff fragment."""

    DELETION = -1
    INSERTION = 1


@dataclass(frozen=True)
class DiffFragment:
    """
    One contiguous span of text present on only one side of a comparison.

    Deletions exist only on side A, insertions only on side B.
    """

    text: str
    kind: DiffKind

    @property
    def marker(self) -> str:
        return "+" if self.kind is DiffKind.INSERTION else "-"

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "kind": self.kind.name.lower()}


@dataclass(frozen=True)
class URLInput:
    """
    Wrapper for a URL input with validation.

    Frozen to ensure immutability once created.
    """

    url: str

    def __post_init__(self):
        """Validate URL format."""
        if not self.url or not isinstance(self.url, str):
            raise ValueError(f"URL must be a non-empty string: {self.url}")

        url_lower = self.url.lower().strip()
        if not url_lower.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://: {self.url}")


class ResponseBody:
    """
    Single-use response body.

    The fetch layer drains the network stream and hands the bytes (or the
    transfer error) over in this wrapper. ``read()`` may be called once.
    """

    def __init__(self, content: bytes = b"", error: str | None = None):
        self._content = content
        self._error = error
        self._consumed = False

    @classmethod
    def failed(cls, error: str) -> "ResponseBody":
        """Create a body whose transfer failed."""
        return cls(error=error)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def read(self) -> bytes:
        """
        Return the full body.

        Raises:
            BodyReadError: If the body was already read or its transfer failed
        """
        if self._consumed:
            raise BodyReadError("response body has already been consumed")
        self._consumed = True

        if self._error is not None:
            raise BodyReadError(self._error)

        content, self._content = self._content, b""
        return content


@dataclass
class HTTPResponse:
    """A received HTTP response with its not-yet-consumed body."""

    url: str  # Final URL after redirects
    status_code: int
    reason_phrase: str
    headers: dict[str, str]
    body: ResponseBody

    @property
    def status_text(self) -> str:
        """Status line text such as ``200 OK``."""
        return f"{self.status_code} {self.reason_phrase}".strip()


@dataclass
class FetchOutcome:
    """
    Result of attempting to fetch one side's resource.

    Either ``response`` or ``error`` is set. A response with a 4xx/5xx status
    is still a successful fetch.
    """

    url: str
    response: HTTPResponse | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def status_text(self) -> str:
        """Status text of the response, or the error message."""
        if self.response is not None:
            return self.response.status_text
        return self.error or ""


@dataclass
class ComparisonReport:
    """
    Complete comparison of one URL pair.

    Combines the fetch status of both sides with the diff fragments, or the
    error that aborted the comparison.
    """

    url_a: str
    url_b: str
    status_a: str
    status_b: str
    selectors: list[str] | None
    started_at: datetime
    finished_at: datetime | None = None
    fragments: list[DiffFragment] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the comparison completed without aborting."""
        return self.error is None

    @property
    def has_differences(self) -> bool:
        return len(self.fragments) > 0

    @property
    def insertions(self) -> list[DiffFragment]:
        return [f for f in self.fragments if f.kind is DiffKind.INSERTION]

    @property
    def deletions(self) -> list[DiffFragment]:
        return [f for f in self.fragments if f.kind is DiffKind.DELETION]

    def to_dict(self) -> dict:
        """
        Convert report to dictionary for serialization.

        Used for JSON output.
        """
        return {
            "url_a": self.url_a,
            "url_b": self.url_b,
            "status_a": self.status_a,
            "status_b": self.status_b,
            "selectors": self.selectors,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "insertion_count": len(self.insertions),
            "deletion_count": len(self.deletions),
            "fragments": [fragment.to_dict() for fragment in self.fragments],
            "error": self.error,
            "success": self.success,
        }
