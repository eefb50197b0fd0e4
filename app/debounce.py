from __future__ import annotations

import threading
import time
from typing import Callable, Dict


class ScanDebouncer:
    """Drops repeat decodes from one scanning session inside a short window.

    A camera keeps decoding the same QR while it stays in frame; only the first
    read per window is let through. This is a UX guard for a single session and
    not a uniqueness guarantee: the check-in transition is idempotent on its own.
    Sessions idle for longer than the window are forgotten.
    """

    def __init__(self, window_seconds: float = 2.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.window_seconds = window_seconds
        self._clock = clock
        self._last_accepted: Dict[str, float] = {}
        self._last_pruned = clock()
        self._lock = threading.Lock()

    def accept(self, session_id: str) -> bool:
        now = self._clock()
        with self._lock:
            self._prune(now)
            last = self._last_accepted.get(session_id)
            if last is not None and now - last < self.window_seconds:
                return False
            self._last_accepted[session_id] = now
            return True

    def reset(self, session_id: str) -> None:
        with self._lock:
            self._last_accepted.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._last_accepted)

    def _prune(self, now: float) -> None:
        # At most one sweep per window
        if now - self._last_pruned < self.window_seconds:
            return
        self._last_pruned = now
        stale = [key for key, ts in self._last_accepted.items() if now - ts >= self.window_seconds]
        for key in stale:
            del self._last_accepted[key]
