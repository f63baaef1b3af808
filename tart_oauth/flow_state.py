"""Shared state between the callback listener and the flow coordinator

The listener lifecycle is a single enumerated phase guarded by one lock:

    STARTING -> READY -> SHUTDOWN_REQUESTED -> CLOSED

``STARTING -> SHUTDOWN_REQUESTED`` is also allowed so a listener that never
bound can still be driven to CLOSED. Each wait point has an asyncio.Event so
waiters are woken instead of polling.
"""

import asyncio
import logging
import threading
from enum import Enum
from typing import Optional

from .errors import FlowTimeoutError, InvalidTransitionError

logger = logging.getLogger(__name__)


class ListenerPhase(Enum):
    STARTING = "starting"
    READY = "ready"
    SHUTDOWN_REQUESTED = "shutdown_requested"
    CLOSED = "closed"


_ALLOWED = {
    ListenerPhase.STARTING: {ListenerPhase.READY, ListenerPhase.SHUTDOWN_REQUESTED},
    ListenerPhase.READY: {ListenerPhase.SHUTDOWN_REQUESTED},
    ListenerPhase.SHUTDOWN_REQUESTED: {ListenerPhase.CLOSED},
    ListenerPhase.CLOSED: set(),
}


async def _wait(event: asyncio.Event, timeout: Optional[float], waiting_for: str) -> None:
    if timeout is None:
        await event.wait()
        return
    try:
        await asyncio.wait_for(event.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        raise FlowTimeoutError(waiting_for, timeout) from None


class FlowState:
    """Lock guarded record of one flow's listener phase and authorization code"""

    def __init__(self):
        self._lock = threading.Lock()
        self._phase = ListenerPhase.STARTING
        self._code: Optional[str] = None

        self._ready = asyncio.Event()
        self._code_received = asyncio.Event()
        self._shutdown = asyncio.Event()
        self._closed = asyncio.Event()

    @property
    def phase(self) -> ListenerPhase:
        with self._lock:
            return self._phase

    @property
    def authorization_code(self) -> Optional[str]:
        with self._lock:
            return self._code

    @property
    def server_ready(self) -> bool:
        """True once the listener has bound, and stays true through shutdown"""
        return self._ready.is_set()

    @property
    def shutdown_requested(self) -> bool:
        return self.phase in (ListenerPhase.SHUTDOWN_REQUESTED, ListenerPhase.CLOSED)

    @property
    def server_closed(self) -> bool:
        return self.phase is ListenerPhase.CLOSED

    def _transition(self, target: ListenerPhase) -> None:
        with self._lock:
            if target not in _ALLOWED[self._phase]:
                raise InvalidTransitionError(self._phase, target)
            self._phase = target
        logger.debug(f"Listener phase -> {target.value}")

    def mark_ready(self) -> None:
        """Record that the listener has bound its socket"""
        self._transition(ListenerPhase.READY)
        self._ready.set()

    def offer_code(self, code: str) -> bool:
        """Store ``code`` unless one was already received

        Returns:
            True if this call stored the code, False if an earlier one won
        """
        with self._lock:
            if self._code is not None:
                return False
            self._code = code
        self._code_received.set()
        return True

    def request_shutdown(self) -> bool:
        """Ask the listener to stop; later calls are no-ops

        Returns:
            True if this call made the request
        """
        with self._lock:
            if self._phase in (ListenerPhase.SHUTDOWN_REQUESTED, ListenerPhase.CLOSED):
                return False
            self._phase = ListenerPhase.SHUTDOWN_REQUESTED
        logger.debug("Listener phase -> shutdown_requested")
        self._shutdown.set()
        return True

    def mark_closed(self) -> None:
        """Record that the listener stopped accepting; only valid after a shutdown request"""
        with self._lock:
            if self._phase is ListenerPhase.CLOSED:
                return
            if self._phase is not ListenerPhase.SHUTDOWN_REQUESTED:
                raise InvalidTransitionError(self._phase, ListenerPhase.CLOSED)
            self._phase = ListenerPhase.CLOSED
        logger.debug("Listener phase -> closed")
        self._closed.set()

    async def wait_ready(self, timeout: Optional[float] = None) -> None:
        await _wait(self._ready, timeout, "the callback server to start")

    async def wait_for_code(self, timeout: Optional[float] = None) -> str:
        await _wait(self._code_received, timeout, "the authorization redirect")
        return self.authorization_code

    async def wait_shutdown_requested(self) -> None:
        await self._shutdown.wait()

    async def wait_closed(self, timeout: Optional[float] = None) -> None:
        await _wait(self._closed, timeout, "the callback server to close")
