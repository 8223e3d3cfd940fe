"""
Text differ for comparing two strings.

Produces a minimal, human-readable edit sequence and keeps only the spans that
were inserted or deleted.
"""

import logging

from diff_match_patch import diff_match_patch

from .models import DiffFragment, DiffKind

logger = logging.getLogger(__name__)


class TextDiffer:
    """
    Compares two strings with diff-match-patch.

    Long inputs are first diffed line by line for speed, then refined. A
    semantic cleanup pass merges small coincidental equalities into the
    surrounding edits so the result reads as whole words and phrases.
    """

    def __init__(self, timeout: float = 0.0) -> None:
        """
        Initialize the text differ.

        Args:
            timeout: Seconds the diff may take before it settles for a coarser
                result. 0 disables the limit and keeps output deterministic.
        """
        self.timeout = timeout

    def diff(self, a: str, b: str) -> list[DiffFragment]:
        """
        Compare two strings.

        Args:
            a: Text from side A
            b: Text from side B

        Returns:
            Deletions (only in A) and insertions (only in B) in document order
        """
        dmp = diff_match_patch()
        dmp.Diff_Timeout = self.timeout

        diffs = dmp.diff_main(a, b, True)
        dmp.diff_cleanupSemantic(diffs)

        fragments: list[DiffFragment] = []
        for op, text in diffs:
            if op == dmp.DIFF_INSERT:
                fragments.append(DiffFragment(text, DiffKind.INSERTION))
            elif op == dmp.DIFF_DELETE:
                fragments.append(DiffFragment(text, DiffKind.DELETION))

        logger.debug("Text diff produced %d fragments", len(fragments))
        return fragments
