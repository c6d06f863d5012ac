"""
In-process key cache.
"""

import threading
from typing import Any, Dict, Optional


class InMemoryKeyCache:
    """Dict-backed key cache, shared safely across tasks and threads."""

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    async def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
