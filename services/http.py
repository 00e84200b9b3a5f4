# services/http.py
import logging
import time
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
DEFAULT_MAX_RETRIES = 3
DEFAULT_UA = "PartMatch/1.0"


class ProviderError(RuntimeError):
    """Transport/API failure talking to the hosted catalog."""
    pass


class Http:
    """
    JSON GET wrapper with retries, linear backoff, User-Agent and timeout.
    Status >= 400 and bodies that are not JSON count as failed attempts.
    """
    def __init__(self, user_agent: str = DEFAULT_UA, timeout: int = DEFAULT_TIMEOUT,
                 max_retries: int = DEFAULT_MAX_RETRIES, backoff: float = 0.6):
        self.user_agent = user_agent or DEFAULT_UA
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff = backoff

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None,
                 headers: Optional[Dict[str, str]] = None, timeout: Optional[int] = None) -> Any:
        req_headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        if headers:
            req_headers.update(headers)

        use_timeout = timeout if timeout is not None else self.timeout
        attempts = self.max_retries or 1

        for attempt in range(1, attempts + 1):
            try:
                r = requests.get(url, params=params, headers=req_headers, timeout=use_timeout)
                if r.status_code >= 400:
                    raise ProviderError(f"{url} -> HTTP {r.status_code}: {r.text[:200]}")
                return r.json()
            except (requests.RequestException, ValueError, ProviderError) as e:
                if attempt >= attempts:
                    raise ProviderError(f"Failed {url}: {e}") from e
                logger.warning("GET %s failed (attempt %d/%d): %s", url, attempt, attempts, e)
                time.sleep(self.backoff * attempt)
