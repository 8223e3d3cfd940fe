"""
Terminal output formatter for CLI.

Handles all display logic - no business logic, just presentation.
"""

import json

from comparator.models import ComparisonReport


def print_report(report: ComparisonReport) -> None:
    """
    Print a human-readable comparison report to terminal.

    Args:
        report: ComparisonReport for the compared URL pair
    """
    print("\n" + "=" * 80)
    print("HTTP RESPONSE COMPARISON")
    print("=" * 80)
    print(f"\n--- A: {report.url_a} ({report.status_a})")
    print(f"+++ B: {report.url_b} ({report.status_b})")

    if report.selectors is not None:
        print(f"Elements: {', '.join(report.selectors) or '(none)'}")
    else:
        print("Mode:     JSON")

    if report.finished_at:
        duration = (report.finished_at - report.started_at).total_seconds()
        print(f"Duration: {duration:.1f} seconds")

    print(f"\n{'=' * 80}")

    if not report.success:
        print(f"✗ Comparison failed: {report.error}\n")
        return

    if not report.has_differences:
        print("✓ No differences detected.\n")
        return

    print(
        f"Differences Detected: {len(report.deletions)} deletions, "
        f"{len(report.insertions)} insertions"
    )
    print(f"{'=' * 80}\n")

    for fragment in report.fragments:
        _print_fragment(fragment.marker, fragment.text)

    print()


def print_report_json(report: ComparisonReport) -> None:
    """
    Print the report as JSON for programmatic consumers.

    Args:
        report: ComparisonReport for the compared URL pair
    """
    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))


def _print_fragment(marker: str, text: str) -> None:
    """
    Print one fragment, repeating its marker on every line.

    Args:
        marker: '+' or '-'
        text: Fragment text
    """
    for line in text.splitlines() or [""]:
        print(f"{marker} {line}")
