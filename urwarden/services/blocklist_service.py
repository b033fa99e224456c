"""
Blocklist service.
Known bad domains loaded from a flat text file, with exact and
subdomain lookups.
"""

import threading
from contextlib import contextmanager
from typing import FrozenSet, Iterable, Iterator, Optional, Tuple

from urwarden.config import DEFAULT_BLOCKLIST_PATH
from urwarden.exceptions import BlocklistLoadError
from urwarden.utils.domains import normalize_domain
from urwarden.utils.logging_config import StructuredLogger

logger = StructuredLogger(__name__)


class ReadWriteLock:
    """
    Many concurrent readers or one writer.

    Writers are preferred: once a writer is waiting, new readers block until
    it has finished, so a steady stream of lookups cannot starve a reload.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


def parse_blocklist_lines(lines: Iterable[str]) -> Tuple[FrozenSet[str], int]:
    """
    Parse blocklist lines into a set of normalized domains.

    Supports both "domain" and hosts-file "0.0.0.0 domain" lines; the last
    whitespace-separated token is the domain.

    Returns:
        (domains, number of lines read)
    """
    domains = set()
    line_count = 0
    for raw_line in lines:
        line_count += 1
        line = raw_line.strip()

        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        fields = line.split()
        normalized = normalize_domain(fields[-1])
        if normalized:
            domains.add(normalized)

    return frozenset(domains), line_count


class BlocklistIndex:
    """
    In-memory blocklist with fast lookup.

    Each load builds a complete new generation (a frozenset) before swapping
    it in under the write lock. Readers holding the previous generation keep a
    consistent view; a failed load leaves the previous generation in place.

    Subdomain matching walks the host's parent domains ("a.b.example.com" ->
    "b.example.com" -> "example.com"), so a lookup costs one set probe per
    label instead of a scan over every entry.
    """

    def __init__(self, path: Optional[str] = None):
        self._path = path or DEFAULT_BLOCKLIST_PATH
        self._domains: FrozenSet[str] = frozenset()
        self._lock = ReadWriteLock()
        # Serializes whole loads so two reloads never race on the swap
        self._load_lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    def load(self, path: Optional[str] = None) -> int:
        """
        Load the blocklist file, replacing the current contents.

        A missing file is not an error: the index becomes empty.

        Args:
            path: Optional new file path; remembered for later reloads.

        Returns:
            Number of distinct domains now in the index.

        Raises:
            BlocklistLoadError: If the file exists but cannot be read.
        """
        with self._load_lock:
            if path:
                self._path = path
            current_path = self._path

            logger.debug("Loading blocklist", path=current_path)
            try:
                with open(current_path, "r", encoding="utf-8") as f:
                    domains, line_count = parse_blocklist_lines(f)
            except FileNotFoundError:
                logger.debug("Blocklist file not found, using empty blocklist", path=current_path)
                domains, line_count = frozenset(), 0
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Failed to read blocklist", path=current_path, error=str(e))
                raise BlocklistLoadError(f"error reading blocklist {current_path}: {e}") from e

            with self._lock.write_locked():
                self._domains = domains

            logger.info(
                "Loaded blocklist",
                path=current_path,
                domains=len(domains),
                lines=line_count,
            )
            return len(domains)

    def reload(self) -> int:
        """Load again from the stored path."""
        return self.load()

    def contains(self, host: str) -> Tuple[bool, str]:
        """
        Check whether a host is blocked.

        Exact membership wins over a subdomain match. A subdomain match needs
        a dot boundary: "example.com" blocks "www.example.com" but never
        "badexample.com".

        Returns:
            (matched, matched blocklist domain or "")
        """
        host = (host or "").lower().strip(".")
        if not host:
            return False, ""

        with self._lock.read_locked():
            domains = self._domains

        if host in domains:
            return True, host

        # Most specific parent first
        dot = host.find(".")
        while dot != -1:
            parent = host[dot + 1:]
            if parent in domains:
                return True, parent
            dot = host.find(".", dot + 1)

        return False, ""

    def size(self) -> int:
        with self._lock.read_locked():
            return len(self._domains)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, host: str) -> bool:
        return self.contains(host)[0]
