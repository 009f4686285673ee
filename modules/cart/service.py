"""
Cart Module - Service Layer
==============================
Per-session carts for the HTTP API. Each browser session (cart cookie) owns
one CartStore. The registry lives on the application instance, so separate
apps (and tests) never share carts. Nothing is persisted: carts disappear
with the process.

The registry is bounded: a session idle for longer than the TTL is dropped,
and once max_sessions is reached the least recently used session makes room
for a new one. Only adding a product opens a session; reads never do.
"""

import logging
import secrets
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple

from modules.cart.store import CartStore, resolve_id

logger = logging.getLogger("boutique.cart")


class CartSessions:

    def __init__(
        self,
        max_sessions: int = 10000,
        ttl_seconds: float = 120 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # session id -> (last access, cart), least recently used first
        self._carts: "OrderedDict[str, Tuple[float, CartStore]]" = OrderedDict()

    def new_session_id(self) -> str:
        return secrets.token_urlsafe(24)

    def _expire(self, now: float) -> None:
        while self._carts:
            session_id, (last_seen, _) = next(iter(self._carts.items()))
            if now - last_seen <= self.ttl_seconds:
                break
            del self._carts[session_id]
            logger.debug("Expired cart session %s", session_id[:8])

    def get(self, session_id: Optional[str]) -> Optional[CartStore]:
        """Cart of a live session, refreshing its last access. None if unknown or expired."""
        now = self._clock()
        self._expire(now)
        if not session_id or session_id not in self._carts:
            return None
        _, cart = self._carts[session_id]
        self._carts[session_id] = (now, cart)
        self._carts.move_to_end(session_id)
        return cart

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, CartStore]:
        """Cart for this session; unknown or missing ids get a fresh session."""
        cart = self.get(session_id)
        if cart is not None:
            return session_id, cart

        while len(self._carts) >= self.max_sessions:
            evicted, _ = self._carts.popitem(last=False)
            logger.info("Cart sessions full, evicted %s", evicted[:8])

        session_id = self.new_session_id()
        cart = CartStore()
        self._carts[session_id] = (self._clock(), cart)
        logger.debug("Opened cart session %s", session_id[:8])
        return session_id, cart

    def __len__(self) -> int:
        return len(self._carts)


def match_line_id(cart: CartStore, raw_id: str) -> Any:
    """
    Map an id taken from a URL path (always text) back to the line item's own
    id, which may be an int. Returns None when no line matches.
    """
    for item in cart.items:
        line_id = resolve_id(item)
        if line_id is not None and str(line_id) == raw_id:
            return line_id
    return None
