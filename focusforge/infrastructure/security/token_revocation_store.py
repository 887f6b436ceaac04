from __future__ import annotations

import logging
import time
from datetime import datetime
from threading import Event, Lock, Thread
from typing import Callable

from focusforge.application.ports.token_revocation_port import TokenRevocationPort


logger = logging.getLogger(__name__)

DEFAULT_COMPACTION_INTERVAL_SECONDS = 60 * 60


class InMemoryTokenRevocationStore(TokenRevocationPort):
    """Process-local set of revoked tokens.

    Each entry remembers the token's own expiry. Compaction only drops entries
    whose token has expired, since those are rejected by the expiry check and
    no longer need a record. Nothing here survives a restart.
    """

    def __init__(
        self,
        *,
        compaction_interval_seconds: float = DEFAULT_COMPACTION_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        if compaction_interval_seconds <= 0:
            raise ValueError("compaction_interval_seconds must be positive.")
        self._compaction_interval_seconds = compaction_interval_seconds
        self._clock = clock
        self._entries: dict[str, float] = {}
        self._lock = Lock()
        self._stop_event = Event()
        self._thread: Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def revoke(self, token: str, *, expires_at: datetime) -> None:
        expiry = expires_at.timestamp()
        with self._lock:
            current = self._entries.get(token)
            if current is None or current < expiry:
                self._entries[token] = expiry

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token in self._entries

    def compact(self, *, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        with self._lock:
            live = {token: expiry for token, expiry in self._entries.items() if expiry > now}
            dropped = len(self._entries) - len(live)
            self._entries = live
        if dropped:
            logger.info("Compacted %s expired token revocation(s)", dropped)
        return dropped

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = Thread(
            target=self._run,
            name="token-revocation-compaction",
            daemon=True,
        )
        self._thread.start()

    def stop(self, *, timeout: float | None = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        thread.join(timeout=timeout)
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self._compaction_interval_seconds):
            try:
                self.compact()
            except Exception:
                logger.exception("Token revocation compaction failed")
