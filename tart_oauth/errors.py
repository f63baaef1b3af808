"""Error types for the authorization flow

Everything a flow can fail with derives from AuthError so callers at the CLI
boundary can render a single message. Underlying library exceptions are
chained with ``raise ... from``.
"""

from typing import Optional


class AuthError(Exception):
    """Base class for authorization flow failures"""


# Configuration

class ConfigError(AuthError):
    """Required configuration is missing"""


class AppIdMissingError(ConfigError):
    def __init__(self):
        super().__init__("--app-id flag missing")


class AppSecretMissingError(ConfigError):
    def __init__(self):
        super().__init__("--app-secret flag missing")


class AddressMissingError(ConfigError):
    def __init__(self):
        super().__init__("--address flag missing")


# Address resolution

class AddressError(AuthError):
    """Listening address could not be resolved"""


class InvalidAddressError(AddressError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f'"{address}" is not a valid address.')


class UrlParseError(AddressError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f'Url parse error for "{address}"')


class AddressIoError(AddressError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f'I/O error while resolving "{address}"')


# Flow

class ServerBindError(AuthError):
    def __init__(self, host: str, port: int):
        self.host = host
        self.port = port
        super().__init__(f"Could not bind callback server to {host}:{port}")


class LaunchError(AuthError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Could not open a browser. Please open this URL manually:\n{url}")


class FlowTimeoutError(AuthError):
    def __init__(self, waiting_for: str, timeout: float):
        self.waiting_for = waiting_for
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout} seconds waiting for {waiting_for}")


class FlowInProgressError(AuthError):
    def __init__(self):
        super().__init__("An authorization flow is already running on this coordinator")


class InvalidTransitionError(AuthError, RuntimeError):
    """A state machine was asked to make a transition it does not allow"""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Invalid transition from {current.name} to {target.name}")


# Token exchange

class ExchangeError(AuthError):
    """Authorization code could not be exchanged for tokens"""


class ExchangeTransportError(ExchangeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ExchangeParseError(ExchangeError):
    def __init__(self, message: str = "Token exchange response had an unexpected shape"):
        super().__init__(message)


class EmptyAccessTokenError(ExchangeError):
    def __init__(self):
        super().__init__("access_token was empty!")
