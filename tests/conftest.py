"""Shared fixtures for tart tests."""

import socket
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from tart_oauth import AuthRequest, SocketAddress


def find_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def free_port() -> int:
    return find_free_port()


@pytest.fixture
def auth_request(free_port: int) -> AuthRequest:
    return AuthRequest(
        listen_address=SocketAddress("127.0.0.1", free_port),
        redirect_uri=f"http://127.0.0.1:{free_port}",
        client_id="test-client",
        client_secret="test-secret",
    )


@pytest.fixture
def occupied_port():
    """A port with a live listener on it, so binding it again fails."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    yield sock.getsockname()[1]
    sock.close()


class RedirectingLauncher:
    """Stands in for the browser plus provider: immediately follows the redirect.

    ``extra_redirects`` are sent first, each as a dict of query parameters,
    so tests can deliver forged or incomplete redirects before the real one.
    """

    def __init__(self, code: str = "fixed-code", extra_redirects=None):
        self.code = code
        self.extra_redirects = extra_redirects or []
        self.opened = []
        self.responses = []

    def open(self, url: str) -> None:
        self.opened.append(url)
        query = parse_qs(urlsplit(url).query)
        redirect_uri = query["redirect_uri"][0]
        state = query["state"][0]

        with httpx.Client(trust_env=False) as client:
            for params in self.extra_redirects:
                self.responses.append(client.get(redirect_uri, params=params))
            self.responses.append(client.get(redirect_uri, params={"state": state, "code": self.code}))


class SilentLauncher:
    """A browser the user never finishes logging in with."""

    def __init__(self):
        self.opened = []

    def open(self, url: str) -> None:
        self.opened.append(url)
