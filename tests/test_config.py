"""Tests for configuration loading and token spec resolution."""

import socket

import pytest

from config import ConfigLoader, ExistingToken, resolve_token_spec
from tart_oauth import (
    AddressMissingError,
    AppIdMissingError,
    AppSecretMissingError,
    AuthRequest,
    InvalidAddressError,
    SocketAddress,
)
from tart_oauth import address as address_module


@pytest.fixture
def loader(tmp_path) -> ConfigLoader:
    return ConfigLoader(env_path=str(tmp_path / "missing.env"))


class TestConfigLoader:
    def test_default_when_unset(self, loader: ConfigLoader, monkeypatch) -> None:
        monkeypatch.delenv("TART_TEST_VALUE", raising=False)
        assert loader.get("TART_TEST_VALUE", "fallback") == "fallback"

    def test_typed_values(self, loader: ConfigLoader, monkeypatch) -> None:
        monkeypatch.setenv("TART_TEST_FLOAT", "2.5")
        monkeypatch.setenv("TART_TEST_INT", "7")
        monkeypatch.setenv("TART_TEST_BOOL", "yes")

        assert loader.get("TART_TEST_FLOAT", 0.0) == 2.5
        assert loader.get("TART_TEST_INT", 0) == 7
        assert loader.get("TART_TEST_BOOL", False) is True

    def test_unparseable_number_uses_default(self, loader: ConfigLoader, monkeypatch) -> None:
        monkeypatch.setenv("TART_TEST_FLOAT", "soon")
        assert loader.get("TART_TEST_FLOAT", 60.0) == 60.0

    def test_get_optional_treats_blank_as_unset(self, loader: ConfigLoader, monkeypatch) -> None:
        monkeypatch.setenv("TART_TEST_SECRET", "   ")
        assert loader.get_optional("TART_TEST_SECRET") is None
        monkeypatch.setenv("TART_TEST_SECRET", " s3cret ")
        assert loader.get_optional("TART_TEST_SECRET") == "s3cret"

    def test_env_file_is_loaded(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("TART_FROM_FILE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("TART_FROM_FILE=hello\n")

        loader = ConfigLoader(env_path=str(env_file))

        assert loader.get("TART_FROM_FILE", "") == "hello"
        monkeypatch.delenv("TART_FROM_FILE", raising=False)


class TestResolveTokenSpec:
    def test_token_wins(self) -> None:
        spec = resolve_token_spec(token="abc", app_id=None, app_secret=None, address=None)
        assert spec == ExistingToken(access_token="abc")
        assert "abc" not in repr(spec)

    def test_missing_app_id_first(self) -> None:
        with pytest.raises(AppIdMissingError):
            resolve_token_spec()

    def test_missing_app_secret(self) -> None:
        with pytest.raises(AppSecretMissingError):
            resolve_token_spec(app_id="cid")

    def test_missing_address(self) -> None:
        with pytest.raises(AddressMissingError):
            resolve_token_spec(app_id="cid", app_secret="secret")

    def test_builds_auth_request(self) -> None:
        spec = resolve_token_spec(app_id="cid", app_secret="s3cr3t-value", address="http://127.0.0.1:8123")

        assert isinstance(spec, AuthRequest)
        assert spec.listen_address == SocketAddress("127.0.0.1", 8123)
        assert spec.redirect_uri == "http://127.0.0.1:8123"
        assert spec.client_id == "cid"
        assert spec.scope == "channel:manage:redemptions"
        assert "s3cr3t-value" not in repr(spec)

    def test_unresolvable_address(self, monkeypatch) -> None:
        def fake_getaddrinfo(*args, **kwargs):
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

        monkeypatch.setattr(address_module.socket, "getaddrinfo", fake_getaddrinfo)
        with pytest.raises(InvalidAddressError):
            resolve_token_spec(app_id="cid", app_secret="secret", address="nowhere")
