"""
Target validation and address resolution
"""

import ipaddress
import logging
import socket
from typing import Optional

from .config import FamilyFilter
from .errors import InvalidTargetError, ResolutionError
from .models import AddressFamily, IPAddress


log = logging.getLogger(__name__)


def parse_ip(text: str) -> Optional[IPAddress]:
    """
    Parse an IP literal.

    IPv4-mapped IPv6 addresses are returned as their IPv4 address.

    Returns:
        IP address or None if text is not an IP literal
    """
    try:
        addr = ipaddress.ip_address(text.strip())
    except ValueError:
        return None

    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped:
        return addr.ipv4_mapped
    return addr


class AddressResolver:
    """
    Turns the user's target into the list of addresses to check.

    Hostnames go through the system resolver (getaddrinfo), so
    /etc/hosts and the configured search domains apply.
    """

    def __init__(self, family_filter: FamilyFilter = FamilyFilter.BOTH):
        self.family_filter = family_filter

    def _lookup_host(self, hostname: str) -> list[str]:
        """Forward lookup (A and AAAA) via getaddrinfo"""
        infos = socket.getaddrinfo(hostname, None, 0, socket.SOCK_STREAM)
        return [info[4][0] for info in infos]

    def validate(self, target: str):
        """
        Check that target is an IP literal or a resolvable hostname.

        Raises:
            InvalidTargetError: neither
        """
        if not target or not target.strip():
            raise InvalidTargetError("invalid domain or IP address: empty target")

        if parse_ip(target) is not None:
            return

        try:
            self._lookup_host(target.strip())
        except (OSError, UnicodeError, ValueError) as e:
            raise InvalidTargetError(f"invalid domain or IP address: {e}")

    def resolve(self, target: str) -> list[IPAddress]:
        """
        Resolve target to addresses.

        An IP literal resolves to itself without touching DNS.

        Raises:
            ResolutionError: lookup failed or returned nothing usable
        """
        literal = parse_ip(target)
        if literal is not None:
            return [literal]

        hostname = target.strip()
        try:
            raw = self._lookup_host(hostname)
        except (OSError, UnicodeError, ValueError) as e:
            raise ResolutionError(f"error looking up IP for domain: {e}")

        addresses: list[IPAddress] = []
        for text in raw:
            addr = parse_ip(text)
            if addr is None:
                # Scoped link-local results on older interpreters
                log.debug("Skipping unparseable address %r for %s", text, hostname)
                continue
            if addr not in addresses:
                addresses.append(addr)

        if not addresses:
            raise ResolutionError(f"error looking up IP for domain: no addresses found for {hostname}")

        log.debug("Resolved %s to %s", hostname, ", ".join(str(a) for a in addresses))
        return addresses

    def filter(self, addresses: list[IPAddress]) -> list[IPAddress]:
        """Keep only the addresses allowed by the family filter"""
        return [
            addr for addr in addresses
            if self.family_filter.accepts(AddressFamily.of(addr))
        ]
