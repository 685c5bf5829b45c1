"""Raw URL/host string to canonical host normalization.

A raw line (bare host, ``host:port``, full URL, IPv4 dotted-quad or
bracketed IPv6 literal) is reduced to its host and classified as an IP
literal or a domain name. The rewrite steps are order dependent:

1. strip a leading ``http://`` / ``https://``
2. drop the path (first ``/`` past position 0)
3. drop userinfo (through the first ``@`` past position 0)
4. drop the port / IPv6 brackets
5. IP literals stop here
6. lower-case, drop one trailing ``.`` and one leading ``www.``
7. IDNA to ASCII (failures keep the previous string)

Nothing in here raises for bad input; every outcome is a verdict.
"""

import ipaddress
import logging
from dataclasses import dataclass
from typing import Optional, Union

from hostsan.idna_codec import IDNATranscoder

logger = logging.getLogger(__name__)

# Hosts must stay under this many bytes to be considered valid
MAX_HOST_LENGTH = 253

SCHEMES = ("http://", "https://")

# RFC 1918 and RFC 4193 ranges; loopback/unspecified are checked separately
PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fc00::/7"),
)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class NormalizeResult:
    """Outcome of normalizing one raw line."""
    host: str
    valid: bool = False
    is_ip: bool = False


def is_valid_host(host: str) -> bool:
    """Structural check for a non-IP host: at least one dot, under 253 bytes."""
    return "." in host and len(host.encode("utf-8")) < MAX_HOST_LENGTH


def parse_ip(host: str) -> Optional[IPAddress]:
    """Return the address for a strict IPv4/IPv6 literal, else ``None``."""
    if not host or "%" in host:
        # zone-scoped IPv6 is not a plain literal
        return None
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None


def is_public_ip(addr: IPAddress) -> bool:
    """False for unspecified, loopback and private-range addresses."""
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        addr = addr.ipv4_mapped
    if addr.is_unspecified or addr.is_loopback:
        return False
    return not any(addr in net for net in PRIVATE_NETWORKS)


def strip_to_host(raw: str) -> str:
    """Remove scheme, path, userinfo and port from *raw*."""
    host = raw
    for scheme in SCHEMES:
        if host.startswith(scheme):
            host = host[len(scheme):]

    idx = host.find("/")
    if idx > 0:
        host = host[:idx]

    idx = host.find("@")
    if idx > 0:
        host = host[idx + 1:]

    if ":" in host:
        if "." in host:
            # example.com:443 or 100.100.100.100:80
            host = host[:host.index(":")]
        elif host.startswith("[") and host.endswith("]"):
            # [abcd::dcba]
            host = host[1:-1]
        elif "]:" in host:
            # [abcd::dcba]:1234
            host = host[1:host.index("]:")]

    return host


class HostNormalizer:
    """Normalize raw lines into canonical hosts.

    The transcoder is fixed at construction and shared by every call, so a
    single instance is safe to use from several threads.
    """

    def __init__(self, transcoder: Optional[IDNATranscoder] = None):
        self.transcoder = transcoder or IDNATranscoder()

    def normalize(self, raw: str) -> NormalizeResult:
        host = strip_to_host(raw)

        addr = parse_ip(host)
        if addr is not None:
            return NormalizeResult(host=host, valid=is_public_ip(addr), is_ip=True)

        host = host.lower()
        if host.endswith("."):
            host = host[:-1]
        if host.startswith("www."):
            host = host[4:]

        host = self._to_ascii(host)
        return NormalizeResult(host=host, valid=is_valid_host(host), is_ip=False)

    def _to_ascii(self, host: str) -> str:
        try:
            return self.transcoder.to_ascii(host)
        except UnicodeError as exc:
            # idna.IDNAError is a UnicodeError
            logger.debug("IDNA transcoding failed for %r: %s", host, exc)
            return host


_default_normalizer = HostNormalizer()


def get_normalizer() -> HostNormalizer:
    return _default_normalizer


def normalize(raw: str) -> NormalizeResult:
    """Normalize *raw* with the shared default :class:`HostNormalizer`."""
    return get_normalizer().normalize(raw)
