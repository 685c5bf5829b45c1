"""Public-suffix boundary detection.

Given a normalized host and a set of registered suffixes (IANA TLDs and
Public Suffix List entries), find where the public suffix starts and where
the registrable apex label above it starts::

    locator = SuffixLocator({"com", "co.uk"})
    r = locator.locate("https://blog.example.com/")
    r.host[r.apex_index:]    # "example.com"
    r.host[r.suffix_index:]  # "com"

The walk moves left to right over label boundaries and stops at the first
member of the set, which is the longest matching suffix.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from hostsan.normalizer import HostNormalizer, NormalizeResult

logger = logging.getLogger(__name__)


class SuffixMatch(enum.Enum):
    MATCHED = "matched"            # registrable label above a known suffix
    BARE_SUFFIX = "bare_suffix"    # whole host is itself a known suffix
    UNMATCHED = "unmatched"        # no known suffix, or an IP literal


@dataclass(frozen=True)
class LocateResult:
    """Normalization verdict plus suffix boundary offsets into ``host``.

    Offsets are ``str`` indices into ``host``. They equal byte offsets when
    IDNA succeeded (the host is ASCII); when transcoding fell back on a
    non-ASCII host such as ``bücher_x.com`` they count code points, so
    slice ``host`` rather than its encoded bytes.
    """
    host: str
    valid: bool = False
    is_ip: bool = False
    apex_index: int = 0
    suffix_index: int = 0
    match: SuffixMatch = SuffixMatch.UNMATCHED

    @property
    def apex(self) -> str:
        """Registrable domain, e.g. ``example.com``; empty when unmatched."""
        if self.match is SuffixMatch.UNMATCHED:
            return ""
        return self.host[self.apex_index:]

    @property
    def suffix(self) -> str:
        """Matched public suffix, e.g. ``com``; empty when unmatched."""
        if self.match is SuffixMatch.UNMATCHED:
            return ""
        return self.host[self.suffix_index:]


def find_boundary(host: str, suffixes: frozenset) -> tuple[int, int, SuffixMatch]:
    """Return ``(apex_index, suffix_index, match)`` for *host*."""
    apex = 0
    idx = 0
    while True:
        if host[idx:] in suffixes:
            if idx == apex:
                return apex, idx, SuffixMatch.BARE_SUFFIX
            return apex, idx, SuffixMatch.MATCHED

        apex = idx
        dot = host.find(".", idx)
        if dot < 0:
            break
        idx = dot + 1

    return 0, 0, SuffixMatch.UNMATCHED


class SuffixLocator:
    """Locate apex and suffix boundaries against a read-only suffix set.

    The set is copied into a ``frozenset`` at construction; build a new
    locator to pick up refreshed lists.
    """

    def __init__(self, suffixes: Iterable[str],
                 normalizer: Optional[HostNormalizer] = None):
        self.suffixes = frozenset(s for s in suffixes if s)
        self.normalizer = normalizer or HostNormalizer()
        logger.debug("Suffix locator ready with %d suffixes", len(self.suffixes))

    def __len__(self) -> int:
        return len(self.suffixes)

    def __contains__(self, suffix: str) -> bool:
        return suffix in self.suffixes

    def locate(self, raw: str) -> LocateResult:
        """Normalize *raw* and locate its suffix boundary."""
        return self.locate_normalized(self.normalizer.normalize(raw))

    def locate_normalized(self, result: NormalizeResult) -> LocateResult:
        if result.is_ip or not self.suffixes:
            return LocateResult(host=result.host, valid=result.valid, is_ip=result.is_ip)

        apex, suffix, match = find_boundary(result.host, self.suffixes)
        return LocateResult(
            host=result.host,
            valid=result.valid,
            is_ip=False,
            apex_index=apex,
            suffix_index=suffix,
            match=match,
        )
