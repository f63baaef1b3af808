"""Resolve a user supplied address into a socket address for the callback server

Accepts a full URL (``http://localhost:8080``) or a bare host, optionally with
a port (``localhost``, ``127.0.0.1:9000``). Bare hosts without a port listen on
8080.
"""

import logging
import socket
from typing import Optional, Tuple
from urllib.parse import urlsplit

from .constants import DEFAULT_CALLBACK_PORT
from .errors import AddressIoError, InvalidAddressError, UrlParseError
from .models import SocketAddress

logger = logging.getLogger(__name__)

_SCHEME_DEFAULT_PORTS = {"http": 80, "https": 443}

# Resolver answers meaning the name has no address; anything else is an I/O failure
_NOT_FOUND_ERRORS = {
    code for code in (socket.EAI_NONAME, getattr(socket, "EAI_NODATA", None)) if code is not None
}


def _first_address(host: str, port: int) -> Optional[SocketAddress]:
    """Return the first address ``host``/``port`` resolves to, or None if the name is unknown"""
    if not host or not 0 <= port <= 65535:
        return None
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as e:
        if e.errno not in _NOT_FOUND_ERRORS:
            raise
        logger.debug(f"No address for {host!r}:{port}: {e}")
        return None
    except UnicodeError as e:
        logger.debug(f"No address for {host!r}:{port}: {e}")
        return None

    for _family, _type, _proto, _canonname, sockaddr in infos:
        return SocketAddress(host=sockaddr[0], port=sockaddr[1])
    return None


def _resolve_url(address: str) -> Optional[SocketAddress]:
    try:
        parts = urlsplit(address)
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        raise UrlParseError(address) from e

    if not parts.scheme or not host:
        return None

    if port is None:
        port = _SCHEME_DEFAULT_PORTS.get(parts.scheme.lower())
        if port is None:
            return None

    return _first_address(host, port)


def _split_host_port(address: str) -> Tuple[str, int]:
    """Split ``host[:port]``; IPv6 literals need brackets to carry a port"""
    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        if rest.startswith(":") and rest[1:].isdigit():
            return host, int(rest[1:])
        return host, DEFAULT_CALLBACK_PORT

    host, sep, port = address.rpartition(":")
    if sep and host and ":" not in host and port.isdigit():
        return host, int(port)
    return address, DEFAULT_CALLBACK_PORT


def resolve_address(address: str) -> SocketAddress:
    """Resolve ``address`` into the socket address to listen on

    The address is first tried as a URL. If that gives no address it is
    retried as a bare host with an implicit port of 8080.

    Args:
        address: URL or bare host

    Returns:
        SocketAddress: First resolved address

    Raises:
        UrlParseError: The URL syntax is malformed
        AddressIoError: The resolver failed for a reason other than an unknown name
        InvalidAddressError: Neither interpretation resolved to an address
    """
    try:
        resolved = _resolve_url(address)
        if resolved is None:
            host, port = _split_host_port(address)
            resolved = _first_address(host, port)
    except OSError as e:
        raise AddressIoError(address) from e

    if resolved is None:
        raise InvalidAddressError(address)

    logger.info(f"Resolved {address!r} to {resolved.host}:{resolved.port}")
    return resolved
