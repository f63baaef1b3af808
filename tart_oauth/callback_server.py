"""
Local OAuth callback server
"""
import asyncio
import logging
from typing import Optional

from aiohttp import web

from .constants import SUCCESS_PAGE
from .csrf import state_matches
from .errors import ServerBindError
from .flow_state import FlowState
from .models import SocketAddress

logger = logging.getLogger(__name__)


class OAuthCallbackServer:
    """Local HTTP server that captures the provider's redirect"""

    def __init__(self, address: SocketAddress, expected_state: str, state: Optional[FlowState] = None):
        self.address = address
        self.expected_state = expected_state
        self.state = state or FlowState()
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self._serve_task: Optional[asyncio.Task] = None

        # The provider may redirect to any path registered as the redirect URI
        self.app.router.add_get("/{tail:.*}", self._handle_callback, allow_head=False)

    async def _handle_callback(self, request: web.Request) -> web.Response:
        """Handle OAuth callback request"""
        logger.debug(f"Callback request: {request.method} {request.path}")

        state = request.query.get("state")
        if not state_matches(self.expected_state, state):
            logger.info("Rejected callback with missing or invalid state")
            return web.Response(text="Invalid state!", status=401)

        code = request.query.get("code")
        if not code:
            error = request.query.get("error")
            if error:
                logger.warning(f"OAuth error: {error} {request.query.get('error_description', '')}".rstrip())
            return web.Response(text="must provide code", status=400)

        if self.state.offer_code(code):
            logger.info("Received authorization code")
        else:
            logger.debug("Authorization code already received, ignoring repeat delivery")

        return web.Response(text=SUCCESS_PAGE, content_type="text/html")

    async def start(self) -> None:
        """Bind the server and start serving in a background task

        Raises:
            ServerBindError: If the address cannot be bound
        """
        host, port = self.address
        logger.info(f"Starting OAuth callback server at {host}:{port}")

        self.runner = web.AppRunner(self.app, access_log=None)
        await self.runner.setup()

        site = web.TCPSite(self.runner, host=host, port=port)
        try:
            await site.start()
        except OSError as e:
            self.state.request_shutdown()
            await self.runner.cleanup()
            self.state.mark_closed()
            raise ServerBindError(host, port) from e

        self._serve_task = asyncio.create_task(self._serve())
        if not self.state.shutdown_requested:
            self.state.mark_ready()
        logger.info(f"OAuth callback server listening on {host}:{port}")

    async def _serve(self) -> None:
        await self.state.wait_shutdown_requested()
        logger.info("Stopping OAuth callback server")
        try:
            await self.runner.cleanup()
        finally:
            self.state.mark_closed()

    def request_shutdown(self) -> None:
        """Ask the server to stop; safe to call more than once"""
        self.state.request_shutdown()

    async def wait_closed(self, timeout: Optional[float] = None) -> None:
        """Wait until the server has stopped accepting connections"""
        await self.state.wait_closed(timeout)
        if self._serve_task is not None:
            # Surfaces any error raised while cleaning up
            await self._serve_task

    async def stop(self, timeout: Optional[float] = None) -> None:
        """Request shutdown and wait for the server to close"""
        self.request_shutdown()
        await self.wait_closed(timeout)


async def start_callback_server(address: SocketAddress, expected_state: str) -> OAuthCallbackServer:
    """
    Start OAuth callback server.

    Args:
        address: Address to listen on
        expected_state: Expected state parameter for CSRF protection

    Returns:
        OAuthCallbackServer instance, already serving
    """
    server = OAuthCallbackServer(address, expected_state)
    await server.start()
    return server
