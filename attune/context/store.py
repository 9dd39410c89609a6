"""
Session Context Store — thread-safe keyed table of EmotionalContext objects.

The table itself is guarded by one lock and every session carries its own
lock, so updates to different sessions run in parallel while updates to the
same session are serialised. Callers never receive the stored objects: every
read and every update hands back a deep copy taken while the session lock is
held, so a copy can never mix an old history with new aggregates.

Lock order is always session lock -> table lock; the table lock is never
held while waiting for a session lock.
"""

from __future__ import annotations

import threading
from typing import Callable, Iterator, Optional

import structlog

from attune.types import EmotionalContext

logger = structlog.get_logger(__name__)


class _SessionSlot:
    """A stored context paired with the lock that serialises access to it."""

    __slots__ = ("lock", "context")

    def __init__(self, context: EmotionalContext) -> None:
        self.lock = threading.Lock()
        self.context = context


class SessionContextStore:
    """
    In-memory session -> EmotionalContext table.

    Sessions are created lazily by ``update()`` and removed only by
    ``discard()`` or ``clear()``. There is no expiry; long-running hosts
    should discard finished sessions.
    """

    def __init__(self) -> None:
        self._table_lock = threading.Lock()
        self._slots: dict[str, _SessionSlot] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(
        self,
        session_key: str,
        mutate: Callable[[EmotionalContext], None],
        factory: Callable[[str], EmotionalContext],
    ) -> tuple[EmotionalContext, bool]:
        """
        Atomically apply ``mutate`` to the session's context.

        Creates the context with ``factory`` if the session does not exist
        yet. Returns a deep copy of the updated context and whether the
        session was created by this call.
        """
        while True:
            created = False
            with self._table_lock:
                slot = self._slots.get(session_key)
                if slot is None:
                    slot = _SessionSlot(factory(session_key))
                    self._slots[session_key] = slot
                    created = True

            with slot.lock:
                # A concurrent discard/clear may have dropped this slot while
                # we waited; start over so the write lands in the live table.
                with self._table_lock:
                    live = self._slots.get(session_key) is slot
                if not live:
                    logger.debug("context_store.update_retry", session_key=session_key)
                    continue
                mutate(slot.context)
                return slot.context.copy(), created

    def get(self, session_key: str) -> Optional[EmotionalContext]:
        """Deep copy of the session's context, or None if it does not exist."""
        with self._table_lock:
            slot = self._slots.get(session_key)
        if slot is None:
            return None
        with slot.lock:
            return slot.context.copy()

    def discard(self, session_key: str) -> bool:
        """Remove one session. Returns True if it existed."""
        with self._table_lock:
            return self._slots.pop(session_key, None) is not None

    def clear(self) -> int:
        """Remove every session. Returns how many were removed."""
        with self._table_lock:
            count = len(self._slots)
            self._slots.clear()
            return count

    def keys(self) -> list[str]:
        with self._table_lock:
            return list(self._slots)

    def __len__(self) -> int:
        with self._table_lock:
            return len(self._slots)

    def __contains__(self, session_key: object) -> bool:
        with self._table_lock:
            return session_key in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
