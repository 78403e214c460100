"""
Shared base for HTTP-backed lookups
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from ..errors import LookupTimeoutError


class HTTPLookup(ABC):
    """
    Base class for lookups that GET a JSON document.

    The client is owned by the caller and may be shared between many
    concurrent lookups. `timeout` bounds the whole request, including
    reading the body.
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = 5.0):
        self.timeout = timeout
        self._client = client

    async def get_json(self, url: str, params: Optional[dict] = None) -> Any:
        """
        GET url and decode the JSON body.

        Raises:
            LookupTimeoutError: request exceeded timeout
            httpx.HTTPError: transport failure or error status
            ValueError: body is not JSON
        """
        try:
            response = await asyncio.wait_for(
                self._client.get(url, params=params),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise LookupTimeoutError(f"request timed out after {self.timeout:g}s")

        response.raise_for_status()
        return response.json()

    @abstractmethod
    async def lookup(self, ip: str) -> Any:
        """Fetch data for a single IP"""
        pass
