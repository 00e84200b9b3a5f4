# services/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_CATALOG = "data/sample_catalog.json"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    catalog_path: str = DEFAULT_CATALOG
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    products_table: str = "products"
    cache_dir: str = ".cache"
    cache_ttl_minutes: int = 5
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()
        return cls(
            catalog_path=os.getenv("PARTMATCH_CATALOG") or DEFAULT_CATALOG,
            supabase_url=os.getenv("PARTMATCH_SUPABASE_URL") or None,
            supabase_key=os.getenv("PARTMATCH_SUPABASE_KEY") or None,
            products_table=os.getenv("PARTMATCH_PRODUCTS_TABLE") or "products",
            cache_dir=os.getenv("PARTMATCH_CACHE_DIR") or ".cache",
            cache_ttl_minutes=_env_int("PARTMATCH_CACHE_TTL_MINUTES", 5),
            log_level=(os.getenv("PARTMATCH_LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def has_hosted_catalog(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
