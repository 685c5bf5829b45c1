"""Line filtering: route each raw line to the accepted or rejected stream."""

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, TextIO

from hostsan.suffixes import LocateResult, SuffixLocator, SuffixMatch

logger = logging.getLogger(__name__)


class Verdict(enum.Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    DROP = "drop"


@dataclass
class FilterPolicy:
    keep_ip: bool = False
    keep_unknown_suffix: bool = False


@dataclass
class FilterStats:
    accepted: int = 0
    rejected: int = 0
    dropped: int = 0

    @property
    def total(self) -> int:
        return self.accepted + self.rejected + self.dropped


def classify(result: LocateResult, policy: FilterPolicy) -> Verdict:
    """Decide what happens to one located host.

    Structurally invalid hosts (and disallowed IPs) are dropped outright.
    IP literals are kept only when the policy asks for them. Domains need a
    registrable label above a known suffix unless unknown suffixes are kept.
    """
    if not result.valid:
        return Verdict.DROP
    if result.is_ip:
        return Verdict.ACCEPT if policy.keep_ip else Verdict.REJECT
    if result.match is SuffixMatch.MATCHED:
        return Verdict.ACCEPT
    return Verdict.ACCEPT if policy.keep_unknown_suffix else Verdict.REJECT


class HostFilter:
    """Apply a :class:`SuffixLocator` and a policy to a stream of lines."""

    def __init__(self, locator: SuffixLocator, policy: FilterPolicy | None = None):
        self.locator = locator
        self.policy = policy or FilterPolicy()

    def process(self, line: str) -> tuple[LocateResult, Verdict]:
        result = self.locator.locate(line.rstrip("\r\n"))
        return result, classify(result, self.policy)

    def run(self, lines: Iterable[str], accepted: TextIO, rejected: TextIO) -> FilterStats:
        """Write canonical hosts to *accepted* / *rejected*, one per line."""
        stats = FilterStats()
        for line in lines:
            if not line.strip():
                stats.dropped += 1
                continue

            result, verdict = self.process(line)
            if verdict is Verdict.ACCEPT:
                accepted.write(result.host + "\n")
                stats.accepted += 1
            elif verdict is Verdict.REJECT:
                rejected.write(result.host + "\n")
                stats.rejected += 1
            else:
                logger.debug("Dropped invalid host %r (from %r)", result.host, line.rstrip("\r\n"))
                stats.dropped += 1

        logger.info(
            "Filtered %d lines: %d accepted, %d rejected, %d dropped",
            stats.total, stats.accepted, stats.rejected, stats.dropped,
        )
        return stats
