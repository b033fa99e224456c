"""
URL parsing and normalization.

Breaks a URL string into scheme / host / tld / path / query. Only http and
https are accepted.
"""

import re
from urllib.parse import SplitResult, quote, urlsplit

from urwarden.exceptions import EmptyHostError, InvalidSchemeError, URLParseError
from urwarden.schemas.result_schemas import NormalizedURL
from urwarden.utils.domains import is_valid_url_scheme
from urwarden.utils.logging_config import StructuredLogger

logger = StructuredLogger(__name__)

# Characters left alone when escaping a path: RFC 3986 pchar plus "/" and "%"
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"

# RFC 3986 reg-name: unreserved, sub-delims and percent escapes. Bytes above
# 0x7f pass through for internationalized names.
_REG_NAME_RE = re.compile(r"(?:[a-z0-9\-._~!$&'()*+,;=]|%[0-9a-f]{2}|[^\x00-\x7f])*")
_IP_LITERAL_RE = re.compile(r"[0-9a-f:.]+(?:%25[a-z0-9\-._~]+)?")
_HOST_ESCAPE_RE = re.compile(r"%([0-9a-f]{2})")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _escaped_path(path: str) -> str:
    return quote(path, safe=_PATH_SAFE)


def naive_tld(host: str) -> str:
    """Everything after the last dot, or the whole host if there is none."""
    head, dot, tail = host.rpartition(".")
    if dot and tail:
        return tail
    return host


def _syntax_error(parts: SplitResult) -> str:
    """Return why ``parts`` is not a well-formed URL, or "" when it is."""
    if "\\" in parts.netloc:
        return "invalid character '\\' in host name"

    hostname = parts.hostname or ""
    if ":" in hostname:
        if not _IP_LITERAL_RE.fullmatch(hostname):
            return "invalid IP-literal in host name"
    elif not _REG_NAME_RE.fullmatch(hostname):
        return "invalid character in host name"
    else:
        for escape in _HOST_ESCAPE_RE.findall(hostname):
            # Only escaped UTF-8 bytes may appear in a host
            if int(escape, 16) < 0x80:
                return f"invalid URL escape %{escape.upper()} in host name"

    if _BAD_ESCAPE_RE.search(parts.path):
        return "invalid URL escape in path"
    return ""


def normalize_url(raw: str) -> NormalizedURL:
    """
    Parse and normalize a URL.

    Raises:
        URLParseError: Malformed URL syntax
        InvalidSchemeError: Scheme is not http or https
        EmptyHostError: Host is empty after trimming dots
    """
    logger.debug("Normalizing URL", url=raw)

    raw = (raw or "").strip()
    try:
        parts = urlsplit(raw)
        # Accessing port validates it (non-numeric or out of range raises)
        _ = parts.port
    except ValueError as e:
        logger.debug("Failed to parse URL", url=raw, error=str(e))
        raise URLParseError(f"parse {raw!r}: {e}") from e

    reason = _syntax_error(parts)
    if reason:
        logger.debug("Malformed URL", url=raw, error=reason)
        raise URLParseError(f"parse {raw!r}: {reason}")

    scheme = parts.scheme.lower()
    if not is_valid_url_scheme(scheme):
        logger.debug("Invalid scheme", scheme=scheme)
        raise InvalidSchemeError("invalid scheme: only http/https are allowed")

    host = (parts.hostname or "").lower().strip(".")
    if not host:
        logger.debug("Empty hostname", url=raw)
        raise EmptyHostError("invalid url: host is empty")

    result = NormalizedURL(
        scheme=scheme,
        host=host,
        tld=naive_tld(host),
        path=_escaped_path(parts.path),
        query=parts.query,
    )
    logger.debug("Normalized URL", **result.model_dump())
    return result
