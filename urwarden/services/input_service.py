"""
URL input collection: positional arguments, a file, or stdin.
"""

import sys
from typing import Iterable, List, Optional, TextIO

from urwarden.utils.domains import dedupe
from urwarden.utils.logging_config import StructuredLogger

logger = StructuredLogger(__name__)

DEFAULT_MAX_LINE_LENGTH = 1024 * 1024


def read_url_lines(stream: TextIO, max_line_length: int = DEFAULT_MAX_LINE_LENGTH) -> List[str]:
    """Read one URL per line, skipping blanks and # comments."""
    out: List[str] = []
    for lineno, raw_line in enumerate(stream, start=1):
        if len(raw_line.rstrip("\r\n")) > max_line_length:
            raise ValueError(f"line {lineno}: longer than {max_line_length} characters")
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        out.append(line)
    return out


def collect_urls(
    args: Iterable[str],
    input_path: Optional[str] = None,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> List[str]:
    """
    Collect the URLs to check.

    - input_path empty: use args
    - input_path "-":   read stdin
    - otherwise:        read the named file

    Raises:
        OSError: If the input file cannot be opened
        ValueError: If a line exceeds max_line_length
    """
    if not (input_path or "").strip():
        return dedupe(args)

    if input_path == "-":
        urls = read_url_lines(sys.stdin, max_line_length)
    else:
        with open(input_path, "r", encoding="utf-8") as f:
            urls = read_url_lines(f, max_line_length)

    logger.debug("Read URLs from input", source=input_path, count=len(urls))
    return dedupe(urls)
