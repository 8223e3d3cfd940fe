"""
Structural differ for comparing two JSON documents.

Computes the differences with DeepDiff, renders them as a line-oriented view
of document A (``+`` added, ``-`` removed, `` `` unchanged) and turns the
changed lines into diff fragments.
"""

import difflib
import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from deepdiff import DeepDiff

from .models import ComparisonError, DiffFragment, DiffKind

logger = logging.getLogger(__name__)

SAME = " "
ADDED = "+"
DELETED = "-"

Path = tuple[Any, ...]


class JSONParseError(ComparisonError):
    """Exception raised when a response body is not valid JSON."""

    pass


@dataclass
class _Changes:
    """DeepDiff results indexed by their path in document A."""

    changed: dict[Path, tuple[Any, Any]] = field(default_factory=dict)
    removed: dict[Path, Any] = field(default_factory=dict)
    added: dict[Path, list[tuple[Any, Any]]] = field(default_factory=dict)

    def added_to(self, path: Path) -> list[tuple[Any, Any]]:
        return self.added.get(path, [])


def parse_json(body: bytes | str, side: str = "") -> Any:
    """
    Parse a response body as JSON.

    Raises:
        JSONParseError: If the body is not valid JSON
    """
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        label = f" on side {side}" if side else ""
        raise JSONParseError(f"Invalid JSON{label}: {e}") from e


def parse_diff_lines(lines: Iterable[str]) -> list[DiffFragment]:
    """
    Convert rendered diff lines into fragments.

    Lines starting with ``+`` become insertions and lines starting with ``-``
    become deletions, with that one prefix character removed. Any other line
    is context and is dropped.
    """
    fragments: list[DiffFragment] = []
    for line in lines:
        if line.startswith(ADDED):
            fragments.append(DiffFragment(line[1:], DiffKind.INSERTION))
        elif line.startswith(DELETED):
            fragments.append(DiffFragment(line[1:], DiffKind.DELETION))
    return fragments


class JSONDiffer:
    """
    Compares two JSON documents structurally.

    Key order and whitespace do not matter; added and removed keys, changed
    values and array element changes do. The rendered view follows the shape
    of document A.
    """

    def __init__(self, indent: str = "  ") -> None:
        """
        Initialize the JSON differ.

        Args:
            indent: Indentation added per nesting level in rendered lines
        """
        self.indent = indent

    def compare(self, body_a: bytes | str, body_b: bytes | str) -> list[DiffFragment]:
        """
        Compare two JSON bodies.

        Args:
            body_a: Raw body from side A
            body_b: Raw body from side B

        Returns:
            Changed lines as fragments, in depth-first order of document A

        Raises:
            JSONParseError: If either body is not valid JSON
        """
        doc_a = parse_json(body_a, side="A")
        doc_b = parse_json(body_b, side="B")

        fragments = parse_diff_lines(self.render(doc_a, doc_b))
        logger.debug("JSON diff produced %d fragments", len(fragments))
        return fragments

    def render(self, doc_a: Any, doc_b: Any) -> list[str]:
        """
        Render the structural diff of two parsed documents as text lines.

        Args:
            doc_a: Parsed document from side A
            doc_b: Parsed document from side B

        Returns:
            One line per value, each prefixed with ``+``, ``-`` or a space
        """
        return list(self._render(doc_a, doc_b, None, 0))

    def _render(self, doc_a: Any, doc_b: Any, key: Any, depth: int) -> Iterator[str]:
        # Objects are always compared key by key, however few keys they share
        tree = DeepDiff(doc_a, doc_b, view="tree", threshold_to_diff_deeper=0)
        yield from self._walk(doc_a, doc_b, (), key, depth, self._index_changes(tree))

    def _index_changes(self, tree) -> _Changes:
        changes = _Changes()

        for report_type, levels in tree.items():
            for level in levels:
                path = tuple(level.path(output_format="list"))

                if report_type in ("values_changed", "type_changes"):
                    changes.changed[path] = (level.t1, level.t2)
                elif report_type in ("dictionary_item_removed", "iterable_item_removed"):
                    changes.removed[path] = level.t1
                elif report_type in ("dictionary_item_added", "iterable_item_added"):
                    # DeepDiff reports additions in document B's order
                    changes.added.setdefault(path[:-1], []).append((path[-1], level.t2))
                else:
                    logger.debug("Ignoring %s at %s", report_type, list(path))

        return changes

    def _walk(
        self, value: Any, other: Any, path: Path, key: Any, depth: int, changes: _Changes
    ) -> Iterator[str]:
        # DeepDiff pairs list elements by index when they are not hashable,
        # so arrays are aligned here instead of using its list results
        if isinstance(value, list) and isinstance(other, list):
            yield from self._walk_list(value, other, key, depth)
            return

        if path in changes.changed:
            old, new = changes.changed[path]
            yield from self._block(DELETED, old, key, depth)
            yield from self._block(ADDED, new, key, depth)
            return

        if not isinstance(value, dict):
            yield self._line(SAME, depth, self._label(key) + self._scalar(value))
            return

        yield self._line(SAME, depth, self._label(key) + "{")
        for child_key, child in value.items():
            child_path = path + (child_key,)
            if child_path in changes.removed:
                yield from self._block(DELETED, child, child_key, depth + 1)
            else:
                yield from self._walk(
                    child, other[child_key], child_path, child_key, depth + 1, changes
                )
        for child_key, child in changes.added_to(path):
            yield from self._block(ADDED, child, child_key, depth + 1)
        yield self._line(SAME, depth, "}")

    def _walk_list(self, items_a: list, items_b: list, key: Any, depth: int) -> Iterator[str]:
        """
        Render two arrays aligned on their longest common subsequence.

        Elements only in A are deletions labelled with their index in A,
        elements only in B are insertions labelled with their index in B.
        Replaced elements are paired in order and compared recursively.
        """
        matcher = difflib.SequenceMatcher(
            None,
            [self._digest(item) for item in items_a],
            [self._digest(item) for item in items_b],
            autojunk=False,
        )

        yield self._line(SAME, depth, self._label(key) + "[")
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                for i in range(i1, i2):
                    yield from self._block(SAME, items_a[i], i, depth + 1)
                continue

            paired = min(i2 - i1, j2 - j1) if tag == "replace" else 0
            for offset in range(paired):
                i = i1 + offset
                yield from self._render(items_a[i], items_b[j1 + offset], i, depth + 1)
            for i in range(i1 + paired, i2):
                yield from self._block(DELETED, items_a[i], i, depth + 1)
            for j in range(j1 + paired, j2):
                yield from self._block(ADDED, items_b[j], j, depth + 1)
        yield self._line(SAME, depth, "]")

    def _block(self, marker: str, value: Any, key: Any, depth: int) -> Iterator[str]:
        """Render a whole value with the same marker on every line."""
        if isinstance(value, dict) and value:
            children: Iterable[tuple[Any, Any]] = value.items()
            opening, closing = "{", "}"
        elif isinstance(value, list) and value:
            children = enumerate(value)
            opening, closing = "[", "]"
        else:
            yield self._line(marker, depth, self._label(key) + self._scalar(value))
            return

        yield self._line(marker, depth, self._label(key) + opening)
        for child_key, child in children:
            yield from self._block(marker, child, child_key, depth + 1)
        yield self._line(marker, depth, closing)

    def _line(self, marker: str, depth: int, text: str) -> str:
        return marker + self.indent * depth + text

    @staticmethod
    def _label(key: Any) -> str:
        if key is None:
            return ""
        if isinstance(key, int):
            return f"{key}: "
        return f"{json.dumps(key, ensure_ascii=False)}: "

    @staticmethod
    def _scalar(value: Any) -> str:
        return json.dumps(value, ensure_ascii=False)

    @staticmethod
    def _digest(value: Any) -> str:
        # Canonical form: key order ignored, 1 and 1.0 and true kept distinct
        return json.dumps(value, sort_keys=True, ensure_ascii=False)
