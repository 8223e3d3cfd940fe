"""
Unit tests for core data models.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from comparator.models import (
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


def make_response(status_code: int = 200, reason_phrase: str = "OK") -> HTTPResponse:
    return HTTPResponse(
        url="https://example.com",
        status_code=status_code,
        reason_phrase=reason_phrase,
        headers={},
        body=ResponseBody(b"{}"),
    )


class TestURLInput:
    """Tests for URLInput model."""

    def test_valid_http_url(self):
        """Test that valid HTTP URL is accepted."""
        url_input = URLInput("http://example.com")
        assert url_input.url == "http://example.com"

    def test_valid_https_url(self):
        """Test that valid HTTPS URL is accepted."""
        url_input = URLInput("https://example.com/path")
        assert url_input.url == "https://example.com/path"

    def test_invalid_url_no_scheme(self):
        """Test that URL without http/https scheme is rejected."""
        with pytest.raises(ValueError, match="must start with http:// or https://"):
            URLInput("example.com")

    def test_invalid_url_empty(self):
        """Test that empty URL is rejected."""
        with pytest.raises(ValueError, match="non-empty string"):
            URLInput("")

    def test_invalid_url_none(self):
        """Test that None URL is rejected."""
        with pytest.raises(ValueError, match="must be a non-empty string"):
            URLInput(None)


class TestDiffFragment:
    """Tests for DiffFragment model."""

    def test_fragment_is_immutable(self):
        """Test that fragments cannot be modified after creation."""
        fragment = DiffFragment("text", DiffKind.INSERTION)
        with pytest.raises(FrozenInstanceError):
            fragment.text = "other"

    def test_fragments_compare_by_value(self):
        """Test that equal text and kind make equal fragments."""
        assert DiffFragment("a", DiffKind.DELETION) == DiffFragment("a", DiffKind.DELETION)
        assert DiffFragment("a", DiffKind.DELETION) != DiffFragment("a", DiffKind.INSERTION)

    def test_marker(self):
        """Test the +/- marker of each kind."""
        assert DiffFragment("a", DiffKind.INSERTION).marker == "+"
        assert DiffFragment("a", DiffKind.DELETION).marker == "-"

    def test_to_dict(self):
        """Test serialization of a fragment."""
        fragment = DiffFragment("200 OK", DiffKind.INSERTION)
        assert fragment.to_dict() == {"text": "200 OK", "kind": "insertion"}


class TestResponseBody:
    """Tests for the single-use ResponseBody."""

    def test_read_returns_content(self):
        """Test that the first read returns the full body."""
        body = ResponseBody(b"hello")
        assert body.consumed is False
        assert body.read() == b"hello"
        assert body.consumed is True

    def test_second_read_raises(self):
        """Test that a body cannot be read twice."""
        body = ResponseBody(b"hello")
        body.read()
        with pytest.raises(BodyReadError, match="already been consumed"):
            body.read()

    def test_failed_body_raises_on_read(self):
        """Test that a failed transfer surfaces when the body is read."""
        body = ResponseBody.failed("Body read error: connection reset")
        with pytest.raises(BodyReadError, match="connection reset"):
            body.read()

    def test_body_read_error_is_comparison_error(self):
        """Test the exception hierarchy."""
        assert issubclass(BodyReadError, ComparisonError)


class TestHTTPResponse:
    """Tests for HTTPResponse model."""

    def test_status_text(self):
        """Test that status text combines code and reason."""
        assert make_response(200, "OK").status_text == "200 OK"
        assert make_response(404, "Not Found").status_text == "404 Not Found"

    def test_status_text_without_reason(self):
        """Test status text when the server sends no reason phrase."""
        assert make_response(599, "").status_text == "599"


class TestFetchOutcome:
    """Tests for FetchOutcome model."""

    def test_succeeded_with_response(self):
        """Test that an outcome with a response succeeded."""
        outcome = FetchOutcome(url="https://example.com", response=make_response())
        assert outcome.succeeded is True
        assert outcome.status_text == "200 OK"

    def test_error_status_is_still_success(self):
        """Test that 5xx responses are successful fetches."""
        outcome = FetchOutcome(
            url="https://example.com", response=make_response(503, "Service Unavailable")
        )
        assert outcome.succeeded is True
        assert outcome.status_text == "503 Service Unavailable"

    def test_failed_with_error(self):
        """Test that an outcome with an error failed."""
        outcome = FetchOutcome(url="https://example.com", error="connection refused")
        assert outcome.succeeded is False
        assert outcome.status_text == "connection refused"


class TestComparisonReport:
    """Tests for ComparisonReport model."""

    def make_report(self, **kwargs) -> ComparisonReport:
        defaults = dict(
            url_a="https://staging.example.com",
            url_b="https://example.com",
            status_a="200 OK",
            status_b="200 OK",
            selectors=None,
            started_at=datetime(2024, 1, 1, 12, 0, 0),
            finished_at=datetime(2024, 1, 1, 12, 0, 1),
        )
        defaults.update(kwargs)
        return ComparisonReport(**defaults)

    def test_no_differences(self):
        """Test report without fragments."""
        report = self.make_report()
        assert report.success is True
        assert report.has_differences is False
        assert report.insertions == []
        assert report.deletions == []

    def test_insertions_and_deletions(self):
        """Test fragment partitioning by kind."""
        report = self.make_report(
            fragments=[
                DiffFragment("old", DiffKind.DELETION),
                DiffFragment("new", DiffKind.INSERTION),
                DiffFragment("gone", DiffKind.DELETION),
            ]
        )
        assert report.has_differences is True
        assert [f.text for f in report.deletions] == ["old", "gone"]
        assert [f.text for f in report.insertions] == ["new"]

    def test_failed_report(self):
        """Test that a report with an error is not successful."""
        report = self.make_report(error="Invalid JSON on side A")
        assert report.success is False

    def test_to_dict(self):
        """Test conversion to dictionary."""
        report = self.make_report(
            selectors=["h1"],
            fragments=[
                DiffFragment("Hello", DiffKind.DELETION),
                DiffFragment("Hi", DiffKind.INSERTION),
            ],
        )
        data = report.to_dict()

        assert data["url_a"] == "https://staging.example.com"
        assert data["url_b"] == "https://example.com"
        assert data["selectors"] == ["h1"]
        assert data["started_at"] == "2024-01-01T12:00:00"
        assert data["finished_at"] == "2024-01-01T12:00:01"
        assert data["insertion_count"] == 1
        assert data["deletion_count"] == 1
        assert data["fragments"] == [
            {"text": "Hello", "kind": "deletion"},
            {"text": "Hi", "kind": "insertion"},
        ]
        assert data["error"] is None
        assert data["success"] is True
