"""
I-line lookup via the IRCnet bot API
"""

import logging

from .base import HTTPLookup
from ..errors import ILineStatusError


log = logging.getLogger(__name__)


class ILineLookup(HTTPLookup):
    """
    IRCnet I-line lookup.

    Returns the IRCnet servers whose I-lines allow connections from
    an address. The API wraps results as:

        {"status": "SUCCESS", "response": [{"serverName": "..."}, ...]}

    Only a status of exactly SUCCESS is trusted.
    """

    API_URL = "https://bot.ircnet.info/api/i-line"
    SUCCESS_STATUS = "SUCCESS"

    async def lookup(self, ip: str) -> list[str]:
        """
        Lookup I-line servers for single IP.

        Args:
            ip: IP address

        Returns:
            Server names in API order, possibly empty

        Raises:
            ILineStatusError: API answered with a non-success status
        """
        data = await self.get_json(self.API_URL, params={'q': ip})

        if not isinstance(data, dict):
            raise ILineStatusError()

        status = data.get('status')
        if status != self.SUCCESS_STATUS:
            log.debug("I-line %s returned status %r", ip, status)
            raise ILineStatusError(status)

        servers = []
        for entry in data.get('response') or []:
            if isinstance(entry, dict):
                servers.append(entry.get('serverName') or '')

        log.debug("I-line %s -> %s", ip, servers)
        return servers
