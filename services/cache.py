# services/cache.py
import hashlib
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class DiskCache:
    """JSON-file cache keyed by sha256 of the key; stale, unreadable or unwritable entries are misses."""
    dir: str = ".cache"
    ttl_minutes: float = 5
    enabled: bool = True

    def _path(self, key: str) -> str:
        os.makedirs(self.dir, exist_ok=True)
        h = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return os.path.join(self.dir, f"{h}.json")

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        try:
            p = self._path(key)
            if not os.path.exists(p):
                return None
            with open(p, "r", encoding="utf-8") as f:
                obj = json.load(f)
            ts, data = obj["ts"], obj["data"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.debug("Cache read in %s failed: %s", self.dir, e)
            return None
        if time.time() - ts > self.ttl_minutes * 60:
            logger.debug("Cache entry %s expired", p)
            return None
        return data

    def set(self, key: str, data: Any) -> None:
        if not self.enabled:
            return
        try:
            p = self._path(key)
            with open(p, "w", encoding="utf-8") as f:
                json.dump({"ts": time.time(), "data": data}, f, ensure_ascii=False)
        except (OSError, TypeError) as e:
            logger.debug("Cache write in %s failed: %s", self.dir, e)
