"""
Unit tests for text differ.
"""

from comparator.differ import TextDiffer
from comparator.models import DiffFragment, DiffKind

SWAP = {DiffKind.INSERTION: DiffKind.DELETION, DiffKind.DELETION: DiffKind.INSERTION}


class TestTextDiffer:
    """Tests for TextDiffer class."""

    def test_identical_strings(self):
        """Test that identical strings produce no fragments."""
        differ = TextDiffer()
        for text in ["", "a", "Hello world", "line 1\nline 2\n" * 50]:
            assert differ.diff(text, text) == []

    def test_changed_suffix(self):
        """Test that only the changed part is reported."""
        differ = TextDiffer()

        assert differ.diff("Hello", "Hi") == [
            DiffFragment("ello", DiffKind.DELETION),
            DiffFragment("i", DiffKind.INSERTION),
        ]

    def test_completely_different(self):
        """Test strings without anything in common."""
        differ = TextDiffer()

        assert differ.diff("abc", "xyz") == [
            DiffFragment("abc", DiffKind.DELETION),
            DiffFragment("xyz", DiffKind.INSERTION),
        ]

    def test_insertion_only(self):
        """Test diff against empty text on side A."""
        differ = TextDiffer()

        assert differ.diff("", "new text") == [DiffFragment("new text", DiffKind.INSERTION)]

    def test_deletion_only(self):
        """Test diff against empty text on side B."""
        differ = TextDiffer()

        assert differ.diff("old text", "") == [DiffFragment("old text", DiffKind.DELETION)]

    def test_semantic_cleanup_keeps_whole_words(self):
        """Test that coincidental single-character matches are merged away."""
        differ = TextDiffer()

        fragments = differ.diff("The quick brown fox", "The quick red fox")

        assert "".join(f.text for f in fragments if f.kind is DiffKind.DELETION) == "brown"
        assert "".join(f.text for f in fragments if f.kind is DiffKind.INSERTION) == "red"

    def test_equal_spans_are_dropped(self):
        """Test that unchanged text never appears in fragments."""
        differ = TextDiffer()

        fragments = differ.diff("price: 10 EUR", "price: 12 EUR")

        assert fragments
        assert all("price" not in f.text and "EUR" not in f.text for f in fragments)

    def test_swapped_sides_swap_kinds(self):
        """Test that swapping inputs swaps insertions and deletions."""
        differ = TextDiffer()
        pairs = [
            ("Hello", "Hi"),
            ("abc", "xyz"),
            ("", "added"),
            ("The quick brown fox", "The quick red fox"),
        ]

        for a, b in pairs:
            forward = {(f.text, SWAP[f.kind]) for f in differ.diff(a, b)}
            backward = {(f.text, f.kind) for f in differ.diff(b, a)}
            assert forward == backward

    def test_long_multiline_input(self):
        """Test line-mode speedup on long inputs."""
        differ = TextDiffer()
        a = "".join(f"line {i}\n" for i in range(500))
        b = a.replace("line 250\n", "line two hundred fifty\n")

        fragments = differ.diff(a, b)

        deleted = "".join(f.text for f in fragments if f.kind is DiffKind.DELETION)
        inserted = "".join(f.text for f in fragments if f.kind is DiffKind.INSERTION)
        assert "250" in deleted
        assert "two hundred fifty" in inserted

    def test_deterministic(self):
        """Test that repeated runs give the same result."""
        differ = TextDiffer()
        a = "The quick brown fox jumps over the lazy dog" * 20
        b = "The quick red fox jumped over the lazy cat" * 20

        assert differ.diff(a, b) == differ.diff(a, b)
