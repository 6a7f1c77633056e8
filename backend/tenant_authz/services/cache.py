from __future__ import annotations
"""In-process TTL cache for resolved role catalogs.

Keyed by "{business_id}-{location_id}-{business_type}". Expiry is lazy: an expired
entry is dropped on the read that finds it. Concurrent population of one key is
harmless (last write wins), so the lock only protects the dict itself. Entries are
stored and handed out as copies; callers never share RoleData with the cache.
"""
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from tenant_authz.config.cache import DEFAULT_ROLE_CACHE_TTL
from tenant_authz.models.roles import RoleData


def make_key(business_id: str, location_id: Optional[str], business_type: str) -> str:
    return f"{business_id}-{location_id or ''}-{business_type}"


class PermissionCache:
    def __init__(self, default_ttl: int = DEFAULT_ROLE_CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[List[RoleData], float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[List[RoleData]]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            roles, expires_at = entry
            if now >= expires_at:
                del self._entries[key]
                return None
            return [r.copy() for r in roles]

    def put(self, key: str, roles: List[RoleData], ttl_seconds: Optional[int] = None):
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        expires_at = self._clock() + ttl
        with self._lock:
            self._entries[key] = ([r.copy() for r in roles], expires_at)

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str):
        return self.get(key) is not None


__all__ = ['PermissionCache', 'make_key']
