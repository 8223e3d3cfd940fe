"""
CLI main entry point for HTTP Response Comparator.

Thin wrapper around the core engine - no business logic here.
"""

import argparse
import logging
import sys

from comparator import ComparisonRunner

from .output import print_report, print_report_json

EXIT_SAME = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Compare the responses of two URLs that should serve the same content.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Without --element the responses are compared as JSON documents.

Examples:
  %(prog)s https://staging.example.com/api/items https://example.com/api/items
  %(prog)s https://staging.example.com/ https://example.com/ -e h1 -e "div.price"
  %(prog)s URL_A URL_B --format json --timeout 60
        """,
    )

    parser.add_argument("url_a", type=str, help="URL of side A (e.g. staging)")
    parser.add_argument("url_b", type=str, help="URL of side B (e.g. production)")

    parser.add_argument(
        "-e",
        "--element",
        dest="elements",
        action="append",
        default=None,
        metavar="SELECTOR",
        help="CSS selector of HTML elements to compare (repeatable)",
    )

    parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=30,
        help="Timeout in seconds for each fetch (default: 30)",
    )

    parser.add_argument(
        "--user-agent",
        type=str,
        default=None,
        help="Custom User-Agent header (optional)",
    )

    parser.add_argument(
        "--no-redirects",
        action="store_true",
        help="Do not follow HTTP redirects",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    """
    Send engine logs to stderr.

    Args:
        verbose: Log at DEBUG instead of INFO level
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> None:
    """
    Main CLI entry point.

    Orchestrates the entire CLI workflow:
    1. Parse arguments
    2. Fetch and compare both URLs
    3. Display results

    Exits with 0 if the responses match, 1 if they differ and 2 if the
    comparison could not be completed.
    """
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    runner = ComparisonRunner(
        fetch_timeout=args.timeout * 1000,  # Convert to milliseconds
        user_agent=args.user_agent,
        follow_redirects=not args.no_redirects,
    )

    try:
        report = runner.run(args.url_a, args.url_b, args.elements)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    if args.format == "json":
        print_report_json(report)
    else:
        print_report(report)

    if not report.success:
        sys.exit(EXIT_ERROR)
    if report.has_differences:
        sys.exit(EXIT_DIFFERENT)
    sys.exit(EXIT_SAME)


if __name__ == "__main__":
    main()
