"""
PTR (reverse DNS) resolver
"""

import logging
from typing import Optional

import dns.asyncresolver
import dns.reversename


log = logging.getLogger(__name__)


class PTRResolver:
    """
    Async PTR record resolver.

    Performs reverse DNS lookups with dnspython's asyncio resolver, so
    an in-flight query is abandoned as soon as its task is cancelled.
    Unlike a plain gethostbyaddr() call, every PTR name is returned.
    """

    def __init__(self, timeout: float = 5.0,
                 resolver: Optional[dns.asyncresolver.Resolver] = None):
        self.timeout = timeout
        self._resolver = resolver

    def _get_resolver(self) -> dns.asyncresolver.Resolver:
        """Get or create the DNS resolver"""
        if self._resolver is None:
            self._resolver = dns.asyncresolver.Resolver()
            self._resolver.timeout = self.timeout
            self._resolver.lifetime = self.timeout
        return self._resolver

    async def resolve(self, ip: str) -> list[str]:
        """
        Async PTR lookup for single IP.

        Args:
            ip: IP address to resolve

        Returns:
            Hostnames without the trailing dot

        Raises:
            dns.exception.DNSException: NXDOMAIN, no answer, timeout, ...
        """
        resolver = self._get_resolver()
        rev = dns.reversename.from_address(ip)
        answer = await resolver.resolve(rev, "PTR", lifetime=self.timeout)
        names = []
        for rdata in answer:
            name = str(rdata).rstrip(".")
            if name and name not in names:
                names.append(name)

        log.debug("PTR %s -> %s", ip, names)
        return names
