"""Authorization Code flow coordinator

Runs one complete browser login: start the local callback server, send the
user to the provider, capture the redirect, exchange the code and tear the
server down. The server is always stopped and observed closed before
``authorize`` returns or raises.
"""

import asyncio
import logging
from enum import Enum
from typing import List, Optional

from .authorization import build_authorization_url
from .browser import BrowserLauncher
from .callback_server import OAuthCallbackServer
from .constants import TWITCH_AUTH_BASE_URL
from .csrf import mint_csrf_token
from .errors import FlowInProgressError, InvalidTransitionError
from .models import AuthRequest, TokenPair
from .token_exchange import TokenExchanger

logger = logging.getLogger(__name__)


class FlowPhase(Enum):
    IDLE = "idle"
    SERVER_STARTING = "server_starting"
    SERVER_READY = "server_ready"
    AWAITING_REDIRECT = "awaiting_redirect"
    CODE_RECEIVED = "code_received"
    EXCHANGING = "exchanging"
    CLOSING = "closing"
    CLOSED = "closed"
    FAILED = "failed"


_TRANSITIONS = {
    FlowPhase.IDLE: {FlowPhase.SERVER_STARTING},
    FlowPhase.SERVER_STARTING: {FlowPhase.SERVER_READY},
    FlowPhase.SERVER_READY: {FlowPhase.AWAITING_REDIRECT},
    FlowPhase.AWAITING_REDIRECT: {FlowPhase.CODE_RECEIVED},
    FlowPhase.CODE_RECEIVED: {FlowPhase.EXCHANGING},
    FlowPhase.EXCHANGING: {FlowPhase.CLOSING},
    FlowPhase.CLOSING: {FlowPhase.CLOSED},
    FlowPhase.CLOSED: set(),
    FlowPhase.FAILED: set(),
}

_TERMINAL = (FlowPhase.CLOSED, FlowPhase.FAILED)


class AuthCoordinator:
    """Drives a single Authorization Code flow at a time

    Args:
        launcher: Object with an ``open(url)`` method; defaults to the system browser
        exchanger: Object with an async ``exchange(...)`` method returning a TokenPair
        auth_base_url: Provider OAuth base URL
        timeout: Seconds to wait for the server to start and for the redirect.
            None waits forever.
    """

    def __init__(
        self,
        launcher: Optional[BrowserLauncher] = None,
        exchanger: Optional[TokenExchanger] = None,
        auth_base_url: str = TWITCH_AUTH_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self.launcher = launcher or BrowserLauncher()
        self.exchanger = exchanger or TokenExchanger(base_url=auth_base_url)
        self.auth_base_url = auth_base_url
        self.timeout = timeout

        self.phase = FlowPhase.IDLE
        self.history: List[FlowPhase] = [FlowPhase.IDLE]
        self.failure: Optional[BaseException] = None
        self.server: Optional[OAuthCallbackServer] = None

    def _transition(self, target: FlowPhase) -> None:
        if target not in _TRANSITIONS[self.phase]:
            raise InvalidTransitionError(self.phase, target)
        self.phase = target
        self.history.append(target)
        logger.debug(f"Flow phase -> {target.value}")

    def _fail(self, reason: BaseException) -> None:
        if self.phase in _TERMINAL:
            return
        self.phase = FlowPhase.FAILED
        self.history.append(FlowPhase.FAILED)
        self.failure = reason
        logger.error(f"Authorization flow failed: {reason!r}")

    async def authorize(self, request: AuthRequest) -> TokenPair:
        """Run the flow and return the issued tokens

        Raises:
            FlowInProgressError: Another flow is running on this coordinator
            AuthError: Any failure of the flow, after the server has closed
        """
        if self.phase not in (FlowPhase.IDLE,) + _TERMINAL:
            raise FlowInProgressError()

        self.phase = FlowPhase.IDLE
        self.history = [FlowPhase.IDLE]
        self.failure = None

        logger.info(f"Using callback address {request.listen_address.host}:{request.listen_address.port}")
        csrf_token = mint_csrf_token()
        server = OAuthCallbackServer(request.listen_address, csrf_token)
        self.server = server
        self._transition(FlowPhase.SERVER_STARTING)

        try:
            tokens = await self._run(server, request, csrf_token)
            self._transition(FlowPhase.CLOSING)
        except BaseException as e:
            self._fail(e)
            await self._close(server, failure=e)
            raise

        try:
            await self._close(server)
        except BaseException as e:
            self._fail(e)
            raise

        self._transition(FlowPhase.CLOSED)
        return tokens

    async def _close(self, server: OAuthCallbackServer, failure: Optional[BaseException] = None) -> None:
        """Stop ``server`` and wait until it has closed, even if cancelled again meanwhile

        When the flow has already failed with ``failure``, a teardown error is
        logged and ``failure`` stays the exception the caller sees.
        """
        logger.info("Waiting for server to close.")
        stopping = asyncio.ensure_future(server.stop())
        cancelled = False
        while not stopping.done():
            try:
                await asyncio.wait([stopping])
            except asyncio.CancelledError:
                cancelled = True
        logger.info("Done waiting for server to close.")

        error = stopping.exception()
        if failure is not None:
            if error is not None:
                logger.error(f"Callback server did not close cleanly: {error!r}")
            return
        if error is not None:
            raise error
        if cancelled:
            raise asyncio.CancelledError()

    async def _run(self, server: OAuthCallbackServer, request: AuthRequest, csrf_token: str) -> TokenPair:
        await server.start()

        await server.state.wait_ready(self.timeout)
        logger.info("Done waiting for server to start.")
        self._transition(FlowPhase.SERVER_READY)

        auth_url = build_authorization_url(
            client_id=request.client_id,
            redirect_uri=request.redirect_uri,
            scope=request.scope,
            state=csrf_token,
            base_url=self.auth_base_url,
        )
        logger.info(f"Authorization URL: {auth_url}")

        # The listener keeps serving on the loop while the browser starts
        await asyncio.to_thread(self.launcher.open, auth_url)
        self._transition(FlowPhase.AWAITING_REDIRECT)

        logger.info("Waiting for auth confirmation.")
        code = await server.state.wait_for_code(self.timeout)
        logger.info("Done waiting for auth confirmation.")
        self._transition(FlowPhase.CODE_RECEIVED)

        self._transition(FlowPhase.EXCHANGING)
        return await self.exchanger.exchange(
            request.client_id,
            request.client_secret,
            request.redirect_uri,
            code,
        )

    def authorize_sync(self, request: AuthRequest) -> TokenPair:
        """Blocking wrapper around ``authorize`` for callers without an event loop"""
        return asyncio.run(self.authorize(request))


async def authorize(request: AuthRequest, timeout: Optional[float] = None) -> TokenPair:
    """Run one flow with the system browser and the Twitch token endpoint"""
    return await AuthCoordinator(timeout=timeout).authorize(request)
