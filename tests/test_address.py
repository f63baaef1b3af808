"""Tests for listening address resolution."""

import socket

import pytest

from tart_oauth import (
    AddressIoError,
    InvalidAddressError,
    SocketAddress,
    UrlParseError,
    resolve_address,
)
from tart_oauth import address as address_module


@pytest.fixture
def fake_dns(monkeypatch):
    """Resolve a fixed set of names without touching the network."""
    known = {"example.com": "93.184.216.34", "localhost": "127.0.0.1"}
    calls = []

    def fake_getaddrinfo(host, port, *args, **kwargs):
        calls.append((host, port))
        if host in known:
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", (known[host], port))]
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(address_module.socket, "getaddrinfo", fake_getaddrinfo)
    return calls


class TestResolveAddress:
    def test_bare_host_with_port(self, fake_dns) -> None:
        assert resolve_address("example.com:9000") == SocketAddress("93.184.216.34", 9000)

    def test_bare_host_defaults_to_8080(self, fake_dns) -> None:
        assert resolve_address("example.com").port == 8080

    def test_url_with_port(self, fake_dns) -> None:
        assert resolve_address("http://localhost:3000/callback") == SocketAddress("127.0.0.1", 3000)

    def test_url_without_port_uses_scheme_default(self, fake_dns) -> None:
        assert resolve_address("http://example.com/callback").port == 80
        assert resolve_address("https://example.com").port == 443

    def test_invalid_address(self, fake_dns) -> None:
        with pytest.raises(InvalidAddressError) as exc_info:
            resolve_address("::::not-an-address::::")
        assert exc_info.value.address == "::::not-an-address::::"
        assert "is not a valid address" in str(exc_info.value)

    def test_unknown_url_host_falls_back_then_fails(self, fake_dns) -> None:
        with pytest.raises(InvalidAddressError):
            resolve_address("http://nowhere.invalid:8000")
        hosts = [host for host, _ in fake_dns]
        assert hosts[0] == "nowhere.invalid"

    def test_empty_address(self, fake_dns) -> None:
        with pytest.raises(InvalidAddressError):
            resolve_address("")

    def test_malformed_url_port(self, fake_dns) -> None:
        with pytest.raises(UrlParseError):
            resolve_address("http://example.com:notaport")

    def test_resolver_io_failure(self, monkeypatch) -> None:
        def broken_getaddrinfo(*args, **kwargs):
            raise OSError("resolver unavailable")

        monkeypatch.setattr(address_module.socket, "getaddrinfo", broken_getaddrinfo)
        with pytest.raises(AddressIoError) as exc_info:
            resolve_address("example.com")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_temporary_resolver_failure(self, monkeypatch) -> None:
        def flaky_getaddrinfo(*args, **kwargs):
            raise socket.gaierror(socket.EAI_AGAIN, "Temporary failure in name resolution")

        monkeypatch.setattr(address_module.socket, "getaddrinfo", flaky_getaddrinfo)
        with pytest.raises(AddressIoError) as exc_info:
            resolve_address("example.com")
        assert isinstance(exc_info.value.__cause__, socket.gaierror)

    def test_bracketed_ipv6_with_port(self, monkeypatch) -> None:
        seen = []

        def fake_getaddrinfo(host, port, *args, **kwargs):
            seen.append((host, port))
            return [(socket.AF_INET6, socket.SOCK_STREAM, 6, "", (host, port, 0, 0))]

        monkeypatch.setattr(address_module.socket, "getaddrinfo", fake_getaddrinfo)
        assert resolve_address("[::1]:9000") == SocketAddress("::1", 9000)
        assert seen == [("::1", 9000)]

    def test_numeric_address_resolves_without_dns(self) -> None:
        assert resolve_address("127.0.0.1:9000") == SocketAddress("127.0.0.1", 9000)
        assert resolve_address("http://127.0.0.1:9001") == SocketAddress("127.0.0.1", 9001)
