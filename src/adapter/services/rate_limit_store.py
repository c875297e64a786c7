import threading
from typing import Dict, List, Tuple

from src.app.services.rate_limiter import RateLimitStore


class InMemoryRateLimitStore(RateLimitStore):
    """
    Process-local rate limit store.

    One instance per application; counters are lost on restart and are not
    shared between processes.
    """

    def __init__(self):
        self._windows: Dict[str, Tuple[int, List[float]]] = {}
        self._lock = threading.RLock()

    def transaction(self):
        return self._lock

    def get_window(self, key: str) -> List[float]:
        with self._lock:
            entry = self._windows.get(key)
            return list(entry[1]) if entry else []

    def set_window(self, key: str, timestamps: List[float], interval_ms: int) -> None:
        with self._lock:
            if timestamps:
                self._windows[key] = (interval_ms, list(timestamps))
            else:
                self._windows.pop(key, None)

    def delete(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)

    def sweep(self, now_ms: float) -> int:
        removed = 0
        with self._lock:
            for key, (interval_ms, timestamps) in list(self._windows.items()):
                recent = [t for t in timestamps if now_ms - t < interval_ms]
                if recent:
                    self._windows[key] = (interval_ms, recent)
                else:
                    del self._windows[key]
                    removed += 1
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)
