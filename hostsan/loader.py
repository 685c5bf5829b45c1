"""Suffix-list loading.

Builds the suffix set consumed by :class:`hostsan.suffixes.SuffixLocator`
from the IANA root-zone TLD list, the Public Suffix List, and any extra local
files or URLs. Remote lists are cached on disk and refreshed once they are
older than the max-age.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from hostsan.idna_codec import IDNATranscoder
from hostsan.suffixes import SuffixLocator
from hostsan.utils.cache import DEFAULT_CACHE_DIR, DEFAULT_MAX_AGE, cache_path, is_fresh, write_cached
from hostsan.utils.http import get_text
from hostsan.utils.validators import is_remote_source

logger = logging.getLogger(__name__)

IANA_TLD_URL = "https://data.iana.org/TLD/tlds-alpha-by-domain.txt"
PUBLIC_SUFFIX_URL = "https://publicsuffix.org/list/effective_tld_names.dat"

DEFAULT_SOURCES = (IANA_TLD_URL, PUBLIC_SUFFIX_URL)

COMMENT_PREFIXES = ("//", "#")


def parse_suffix_lines(lines: Iterable[str],
                       transcoder: Optional[IDNATranscoder] = None) -> set[str]:
    """Parse list lines into lowercase suffixes.

    Comments and blank lines are skipped, ``*.`` wildcard markers are
    stripped, and PSL ``!`` exception rules are ignored. Internationalized
    entries are kept and their punycode form is added alongside, since
    normalized hosts are always ASCII.
    """
    transcoder = transcoder or IDNATranscoder()
    suffixes = set()
    for line in lines:
        row = line.strip()
        if not row or row.startswith(COMMENT_PREFIXES) or row.startswith("!"):
            continue
        # PSL rules end at the first whitespace
        row = row.split()[0]
        if row.startswith("*."):
            row = row[2:]
        row = row.lower().strip(".")
        if not row:
            continue
        suffixes.add(row)
        if not row.isascii():
            try:
                suffixes.add(transcoder.to_ascii(row))
            except UnicodeError as exc:
                logger.debug("Cannot transcode suffix %r: %s", row, exc)
    return suffixes


class SuffixListLoader:
    """Collect suffixes from local files and cached remote lists."""

    def __init__(
        self,
        sources: Optional[Iterable[str]] = None,
        cache_dir: Optional[Path] = None,
        max_age: int = DEFAULT_MAX_AGE,
        include_defaults: bool = True,
    ):
        self.sources = list(sources or [])
        if include_defaults:
            self.sources.extend(s for s in DEFAULT_SOURCES if s not in self.sources)
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self.max_age = max_age

    def resolve(self, source: str) -> Path:
        """Return the local file for *source*, refreshing remote copies."""
        if not is_remote_source(source):
            return Path(source).expanduser()

        target = cache_path(self.cache_dir, source)
        if is_fresh(target, self.max_age):
            return target

        text = get_text(source)
        if text is None:
            if target.exists():
                logger.warning("Using stale copy of %s at %s", source, target)
            else:
                logger.error("Could not fetch %s and no cached copy exists", source)
        else:
            write_cached(target, text)
        return target

    def read(self, source: str) -> set[str]:
        """Suffixes from one source; empty when it cannot be read."""
        path = self.resolve(source)
        try:
            with open(path, encoding="utf-8") as f:
                suffixes = parse_suffix_lines(f)
        except OSError as exc:
            logger.warning("Skipping suffix source %s: %s", source, exc)
            return set()
        logger.info("Loaded %d suffixes from %s", len(suffixes), source)
        return suffixes

    def load(self) -> frozenset[str]:
        """Merge every source into one read-only suffix set."""
        merged: set[str] = set()
        for source in self.sources:
            merged |= self.read(source)
        logger.info("Suffix set holds %d entries from %d sources", len(merged), len(self.sources))
        return frozenset(merged)


def load_locator(
    sources: Optional[Iterable[str]] = None,
    cache_dir: Optional[Path] = None,
    max_age: int = DEFAULT_MAX_AGE,
    include_defaults: bool = True,
) -> SuffixLocator:
    """Load the suffix lists and build a :class:`SuffixLocator` from them."""
    loader = SuffixListLoader(
        sources=sources,
        cache_dir=cache_dir,
        max_age=max_age,
        include_defaults=include_defaults,
    )
    return SuffixLocator(loader.load())
