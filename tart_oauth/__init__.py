"""
Twitch OAuth Authorization Code flow
"""
from .constants import (
    TWITCH_AUTH_BASE_URL,
    DEFAULT_SCOPE,
    DEFAULT_CALLBACK_PORT,
    EXCHANGE_TIMEOUT,
)
from .models import (
    SocketAddress,
    TokenPair,
    AuthRequest,
    mask_token,
)
from .errors import (
    AuthError,
    ConfigError,
    AppIdMissingError,
    AppSecretMissingError,
    AddressMissingError,
    AddressError,
    InvalidAddressError,
    UrlParseError,
    AddressIoError,
    ServerBindError,
    LaunchError,
    FlowTimeoutError,
    FlowInProgressError,
    InvalidTransitionError,
    ExchangeError,
    ExchangeTransportError,
    ExchangeParseError,
    EmptyAccessTokenError,
)
from .address import resolve_address
from .csrf import mint_csrf_token, state_matches
from .authorization import build_authorization_url
from .flow_state import FlowState, ListenerPhase
from .callback_server import OAuthCallbackServer, start_callback_server
from .browser import BrowserLauncher
from .token_exchange import TokenExchanger, exchange_code_for_tokens
from .coordinator import AuthCoordinator, FlowPhase, authorize

__all__ = [
    # Constants
    "TWITCH_AUTH_BASE_URL",
    "DEFAULT_SCOPE",
    "DEFAULT_CALLBACK_PORT",
    "EXCHANGE_TIMEOUT",
    # Models
    "SocketAddress",
    "TokenPair",
    "AuthRequest",
    "mask_token",
    # Errors
    "AuthError",
    "ConfigError",
    "AppIdMissingError",
    "AppSecretMissingError",
    "AddressMissingError",
    "AddressError",
    "InvalidAddressError",
    "UrlParseError",
    "AddressIoError",
    "ServerBindError",
    "LaunchError",
    "FlowTimeoutError",
    "FlowInProgressError",
    "InvalidTransitionError",
    "ExchangeError",
    "ExchangeTransportError",
    "ExchangeParseError",
    "EmptyAccessTokenError",
    # Address / CSRF / URL
    "resolve_address",
    "mint_csrf_token",
    "state_matches",
    "build_authorization_url",
    # Callback Server
    "FlowState",
    "ListenerPhase",
    "OAuthCallbackServer",
    "start_callback_server",
    # Browser / Token Exchange
    "BrowserLauncher",
    "TokenExchanger",
    "exchange_code_for_tokens",
    # Coordinator
    "AuthCoordinator",
    "FlowPhase",
    "authorize",
]
