import asyncio
import json

import dns.resolver
import httpx
import pytest

from chick.enrichment import ILineLookup, IPInfoLookup, PTRResolver
from chick.errors import ILineStatusError, LookupTimeoutError
from chick.models import OrgInfo

from conftest import FakeDNSResolver, mock_client


def run_lookup(lookup_cls, handler, ip, timeout=5.0):
    async def go():
        async with mock_client(handler) as client:
            return await lookup_cls(client, timeout=timeout).lookup(ip)
    return asyncio.run(go())


# ipinfo.io

def test_ipinfo_success():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={
            "ip": "1.2.3.4", "country": "US", "org": "AS1234 Example Org",
            "city": "Somewhere"
        })

    info = run_lookup(IPInfoLookup, handler, "1.2.3.4")
    assert info == OrgInfo(ip="1.2.3.4", country="US", org="AS1234 Example Org")
    assert str(seen[0]) == "https://ipinfo.io/1.2.3.4/json"


def test_ipinfo_missing_fields():
    info = run_lookup(IPInfoLookup, lambda r: httpx.Response(200, json={}), "1.2.3.4")
    assert info == OrgInfo(ip="1.2.3.4", country="", org="")


def test_ipinfo_undecodable_body():
    with pytest.raises(ValueError):
        run_lookup(IPInfoLookup, lambda r: httpx.Response(200, text="<html>nope</html>"), "1.2.3.4")


def test_ipinfo_non_object_body():
    with pytest.raises(ValueError):
        run_lookup(IPInfoLookup, lambda r: httpx.Response(200, json=["1.2.3.4"]), "1.2.3.4")


def test_ipinfo_error_status():
    with pytest.raises(httpx.HTTPStatusError):
        run_lookup(IPInfoLookup, lambda r: httpx.Response(429, text="Too Many Requests"), "1.2.3.4")


def test_ipinfo_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        run_lookup(IPInfoLookup, handler, "1.2.3.4")


def test_ipinfo_timeout():
    async def handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json={})

    with pytest.raises(LookupTimeoutError, match="timed out"):
        run_lookup(IPInfoLookup, handler, "1.2.3.4", timeout=0.05)


# IRCnet I-line

def test_iline_success():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={
            "status": "SUCCESS",
            "response": [{"serverName": "irc1.example.net"}, {"serverName": "irc2.example.net"}]
        })

    servers = run_lookup(ILineLookup, handler, "2001:db8::1")
    assert servers == ["irc1.example.net", "irc2.example.net"]
    assert seen[0].host == "bot.ircnet.info"
    assert seen[0].path == "/api/i-line"
    assert seen[0].params["q"] == "2001:db8::1"


def test_iline_empty_response_is_success():
    body = {"status": "SUCCESS", "response": []}
    assert run_lookup(ILineLookup, lambda r: httpx.Response(200, json=body), "1.2.3.4") == []


def test_iline_non_success_status():
    body = {"status": "FAIL", "response": []}
    with pytest.raises(ILineStatusError, match="failed to get network-info data") as excinfo:
        run_lookup(ILineLookup, lambda r: httpx.Response(200, json=body), "1.2.3.4")
    assert excinfo.value.status == "FAIL"


def test_iline_non_success_status_with_servers():
    body = {"status": "ERROR", "response": [{"serverName": "irc1.example.net"}]}
    with pytest.raises(ILineStatusError):
        run_lookup(ILineLookup, lambda r: httpx.Response(200, json=body), "1.2.3.4")


def test_iline_keeps_entries_without_server_name():
    body = {"status": "SUCCESS", "response": [{"serverName": "irc1.example.net"}, "junk", {}]}
    assert run_lookup(ILineLookup, lambda r: httpx.Response(200, json=body), "1.2.3.4") == ["irc1.example.net", ""]


def test_iline_undecodable_body():
    with pytest.raises(json.JSONDecodeError):
        run_lookup(ILineLookup, lambda r: httpx.Response(200, text="oops"), "1.2.3.4")


def test_iline_timeout():
    async def handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json={"status": "SUCCESS", "response": []})

    with pytest.raises(LookupTimeoutError):
        run_lookup(ILineLookup, handler, "1.2.3.4", timeout=0.05)


# PTR

def test_ptr_resolve_strips_root_dot():
    fake = FakeDNSResolver(names=["host.example.com.", "alias.example.com.", "host.example.com."])
    resolver = PTRResolver(timeout=2.0, resolver=fake)
    names = asyncio.run(resolver.resolve("1.2.3.4"))
    assert names == ["host.example.com", "alias.example.com"]
    assert fake.queries == [("4.3.2.1.in-addr.arpa.", "PTR", 2.0)]


def test_ptr_resolve_failure_propagates():
    fake = FakeDNSResolver(error=dns.resolver.NXDOMAIN())
    with pytest.raises(dns.resolver.NXDOMAIN):
        asyncio.run(PTRResolver(resolver=fake).resolve("192.0.2.1"))
