"""
Organization and country lookup via ipinfo.io
"""

import logging

from .base import HTTPLookup
from ..models import OrgInfo


log = logging.getLogger(__name__)


class IPInfoLookup(HTTPLookup):
    """
    Organization lookup via ipinfo.io.

    Free tier without token is rate limited, which shows up here as
    an HTTP error status.
    """

    API_URL = "https://ipinfo.io/{ip}/json"

    async def lookup(self, ip: str) -> OrgInfo:
        """
        Lookup country and organization for single IP.

        Args:
            ip: IP address

        Returns:
            OrgInfo
        """
        data = await self.get_json(self.API_URL.format(ip=ip))

        if not isinstance(data, dict):
            raise ValueError("unexpected response body from ipinfo.io")

        log.debug("ipinfo %s -> %s", ip, data)
        return OrgInfo(
            ip=data.get('ip') or ip,
            country=data.get('country') or "",
            org=data.get('org') or ""
        )
