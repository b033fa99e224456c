"""
Domain and list helpers shared by the blocklist loader and the input reader.
"""

from typing import Iterable, List

ALLOWED_SCHEMES = ("http", "https")


def normalize_domain(raw: str) -> str:
    """
    Canonicalize a domain token from a blocklist line.

    Returns an empty string for anything that should be ignored:
    comments, wildcards, tokens without a dot, paths.
    """
    domain = (raw or "").strip()
    if not domain:
        return ""

    # Drop trailing comment fragments
    if "#" in domain:
        domain = domain.split("#", 1)[0].strip()

    domain = domain.lower().strip(".")

    if not domain or any(ch in domain for ch in " /\\"):
        return ""

    # Wildcards are not supported
    if domain.startswith("*."):
        return ""

    # Bare TLDs and single labels are excluded
    if "." not in domain:
        return ""

    return domain


def dedupe(items: Iterable[str]) -> List[str]:
    """Remove duplicates while keeping first-seen order."""
    seen = set()
    out: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def is_valid_url_scheme(scheme: str) -> bool:
    return (scheme or "").lower() in ALLOWED_SCHEMES
