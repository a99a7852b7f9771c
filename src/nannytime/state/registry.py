from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .app_state import AppController

logger = logging.getLogger(__name__)


class ClientRegistry:
    """One AppController per signed-in browser session, keyed by session token.

    `is_valid` tells whether a token is still live; controllers whose token
    was revoked or expired are unmounted and dropped on the next access.
    """

    def __init__(
        self,
        factory: Callable[[], AppController],
        *,
        is_valid: Callable[[str], bool] = lambda token: True,
    ):
        self._factory = factory
        self._is_valid = is_valid
        self._clients: dict[str, AppController] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def new_client(self) -> AppController:
        controller = self._factory()
        controller.mount()
        return controller

    def register(self, controller: AppController) -> None:
        session = controller.gate.current_session()
        if session is None:
            raise ValueError("Cannot register a client without a session")
        self.prune()
        with self._lock:
            self._clients[session.token] = controller

    def get(self, token: Optional[str]) -> Optional[AppController]:
        if not token:
            return None
        if not self._is_valid(token):
            self.discard(token)
            return None
        with self._lock:
            return self._clients.get(token)

    def discard(self, token: str) -> Optional[AppController]:
        with self._lock:
            controller = self._clients.pop(token, None)
        if controller is not None:
            controller.unmount()
        return controller

    def prune(self) -> int:
        with self._lock:
            tokens = list(self._clients)
        stale = [t for t in tokens if not self._is_valid(t)]
        for token in stale:
            self.discard(token)
        if stale:
            logger.info("Dropped %d stale client(s)", len(stale))
        return len(stale)
