"""
Per-address enrichment: PTR, ipinfo.io and I-line lookups
"""

import asyncio
import logging

from .ptr_resolver import PTRResolver
from .ipinfo_lookup import IPInfoLookup
from .iline_lookup import ILineLookup
from ..errors import LookupKind, SubLookupError
from ..models import AddressFamily, EnrichmentRecord, IPAddress


log = logging.getLogger(__name__)


class Enricher:
    """
    Enriches one address at a time.

    The three sub-lookups run concurrently and are always all awaited;
    none of them is skipped or cut short because another one failed.
    Each returns its own value or exception and the record is only
    assembled after the join, so sub-lookups never share state.
    """

    def __init__(self, ptr_resolver: PTRResolver, ipinfo: IPInfoLookup,
                 iline: ILineLookup):
        self.ptr_resolver = ptr_resolver
        self.ipinfo = ipinfo
        self.iline = iline

    async def enrich(self, address: IPAddress) -> EnrichmentRecord:
        """
        Run all sub-lookups for address.

        Args:
            address: IP address to enrich

        Returns:
            EnrichmentRecord with whatever succeeded plus the errors
        """
        ip = str(address)
        record = EnrichmentRecord(address=ip, family=AddressFamily.of(address))

        ptr, info, servers = await asyncio.gather(
            self.ptr_resolver.resolve(ip),
            self.ipinfo.lookup(ip),
            self.iline.lookup(ip),
            return_exceptions=True
        )

        for kind, result in ((LookupKind.PTR, ptr),
                             (LookupKind.IPINFO, info),
                             (LookupKind.ILINE, servers)):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                log.debug("%s for %s: %r", kind.value, ip, result)
                record.errors.append(SubLookupError(kind, result))

        if not isinstance(ptr, BaseException):
            record.reverse_names = list(ptr)
        if not isinstance(info, BaseException):
            record.org_info = info
        if not isinstance(servers, BaseException):
            record.network_servers = list(servers)

        return record
