"""
urwarden command line.

Classifies each URL as benign / suspicious / malicious and prints one JSON
object per line.

Examples:
  urwarden 'https://bad.example.com/login'
  urwarden --input urls.txt
  cat urls.txt | urwarden --input -
"""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from urwarden.config import Settings
from urwarden.exceptions import BlocklistLoadError
from urwarden.pipelines.url_pipeline import URLPipeline
from urwarden.services.blocklist_service import BlocklistIndex
from urwarden.services.input_service import collect_urls
from urwarden.services.output_service import write_result_json
from urwarden.utils.logging_config import StructuredLogger, init_logging
from urwarden.version import version_string

EXIT_OK = 0
EXIT_INTERNAL = 1  # blocklist I/O, output failure, bad configuration
EXIT_INPUT = 2     # invalid URL or unreadable input

logger = StructuredLogger("urwarden.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="urwarden",
        description="Heuristic URL classifier (blocklist, suspicious TLD, login-like path).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  urwarden 'https://bad.example.com/login'
  urwarden --input urls.txt
  cat urls.txt | urwarden --input -

Exit codes: 0=ok, 1=internal error, 2=input error
        """,
    )
    parser.add_argument("urls", nargs="*", metavar="URL", help="URLs to classify.")
    parser.add_argument(
        "--input",
        type=str,
        default="",
        help="Path to a file with URLs (one per line). Use '-' for stdin.",
    )
    parser.add_argument(
        "--blocklist",
        type=str,
        default=None,
        help="Blocklist file (default: $URWARDEN_BLOCKLIST_PATH or data/blocklist.txt).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to evaluate URLs (default: $URWARDEN_WORKERS or 4).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="store_true", help="Show version and exit.")
    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.blocklist:
        overrides["blocklist_path"] = args.blocklist
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.verbose:
        overrides["verbose"] = True
    return Settings(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(version_string())
        return EXIT_OK

    try:
        settings = _load_settings(args)
    except ValidationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return EXIT_INTERNAL

    init_logging(settings)

    try:
        urls = collect_urls(args.urls, args.input, settings.max_line_length)
    except (OSError, ValueError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_INPUT

    if not urls:
        parser.print_usage(sys.stderr)
        return EXIT_INPUT

    blocklist = BlocklistIndex(settings.resolved_blocklist_path)
    try:
        blocklist.load()
    except BlocklistLoadError as e:
        print(str(e), file=sys.stderr)
        return EXIT_INTERNAL

    pipeline = URLPipeline(blocklist, settings)

    had_input_error = False
    for outcome in pipeline.analyze_batch(urls):
        if not outcome.ok:
            # Skip this URL; the run still exits 2 at the end
            print(f"{outcome.input_url}: {outcome.error}", file=sys.stderr)
            had_input_error = True
            continue
        try:
            write_result_json(outcome.result)
        except OSError as e:
            logger.error("Failed to write JSON", error=str(e))
            return EXIT_INTERNAL

    if had_input_error:
        return EXIT_INPUT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
