"""
Data models for chick
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class AddressFamily(Enum):
    """IP address family of a resolved address"""
    IPV4 = 4
    IPV6 = 6

    @property
    def record_type(self) -> str:
        return "A" if self is AddressFamily.IPV4 else "AAAA"

    @classmethod
    def of(cls, address: IPAddress) -> 'AddressFamily':
        return cls.IPV4 if address.version == 4 else cls.IPV6


@dataclass
class OrgInfo:
    """Organization and country data from ipinfo.io"""
    ip: str
    country: str = ""
    org: str = ""


@dataclass
class EnrichmentRecord:
    """Everything gathered for a single address"""
    address: str
    family: AddressFamily
    reverse_names: list[str] = field(default_factory=list)
    org_info: Optional[OrgInfo] = None
    network_servers: list[str] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    @property
    def record_type(self) -> str:
        return self.family.record_type

    @property
    def failure(self) -> Optional[str]:
        """Aggregated failure message, None when every sub-lookup succeeded"""
        if not self.errors:
            return None
        return "; ".join(str(e) for e in self.errors)
