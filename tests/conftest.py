import asyncio
import io

import dns.name
import httpx
import pytest
from rich.console import Console

from chick.output import ConsoleOutput


class FakeLookup:
    """Stands in for any sub-lookup: returns a value or raises after a delay"""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []
        self.finished = False
        self.cancelled = False

    async def lookup(self, ip):
        self.calls.append(ip)
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        self.finished = True
        if self.error is not None:
            raise self.error
        return self.result

    resolve = lookup


class FakeDNSResolver:
    """Mimics dns.asyncresolver.Resolver.resolve for PTR queries"""

    def __init__(self, names=None, error=None):
        self.names = names or []
        self.error = error
        self.queries = []

    async def resolve(self, qname, rdtype, lifetime=None):
        self.queries.append((qname.to_text(), rdtype, lifetime))
        if self.error is not None:
            raise self.error
        return [dns.name.from_text(n) for n in self.names]


def mock_client(handler, **kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), **kwargs)


@pytest.fixture
def buffer():
    return io.StringIO()


@pytest.fixture
def output(buffer):
    console = Console(file=buffer, width=200, color_system=None, soft_wrap=True)
    return ConsoleOutput(console=console)
