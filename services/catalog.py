# services/catalog.py
"""
Product catalog access: a local JSON file for development and tests, or the
hosted Postgres REST endpoint the storefront reads from. Both hand back
domain.vehicle.Product objects ready for matching.engine.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, List, Mapping, Optional

from domain.vehicle import CompatibilityRecord, Product
from matching.compatibility import infer_compatibility
from services.cache import DiskCache
from services.http import Http, ProviderError
from services.settings import DEFAULT_CATALOG, Settings

logger = logging.getLogger(__name__)

SELECT_FIELDS = (
    "id,name,description,sku,part_number,"
    "price,discount_price,stock_quantity,compatibility"
)


# ---------------- Row mapping ----------------
def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if row.get(k) is not None:
            return row[k]
    return None


def _to_float(v: Any) -> Optional[float]:
    try:
        return float(v) if v is not None else None
    except (TypeError, ValueError):
        return None


def _to_int(v: Any) -> Optional[int]:
    try:
        return int(v) if v is not None else None
    except (TypeError, ValueError):
        return None


def _compat_records(raw: Any) -> List[CompatibilityRecord]:
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        return []
    return [CompatibilityRecord.from_dict(r) for r in raw if isinstance(r, Mapping)]


def product_from_row(row: Mapping[str, Any]) -> Product:
    name = str(row.get("name") or "")
    description = str(row.get("description") or "")

    # only a missing value is inferred; an explicit [] means no known fitment
    raw = _first(row, "vehicleCompatibility", "compatibility")
    records = _compat_records(raw) if raw is not None else infer_compatibility(name, description)

    price = _to_float(_first(row, "discount_price", "discountPrice")) or _to_float(row.get("price"))

    return Product(
        id=row.get("id"),
        name=name,
        description=description,
        price=price,
        vehicle_compatibility=tuple(records),
        sku=str(row.get("sku") or ""),
        part_number=str(_first(row, "part_number", "partNumber") or ""),
        stock_quantity=_to_int(_first(row, "stock_quantity", "stockQuantity")),
    )


# ---------------- Local file ----------------
def load_catalog(path: str | None = None) -> List[Product]:
    path = path or os.getenv("PARTMATCH_CATALOG") or DEFAULT_CATALOG
    if not os.path.exists(path):
        raise FileNotFoundError(f"Catalog not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if isinstance(raw, Mapping):
        raw = raw.get("products")
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a list of products or {{\"products\": [...]}}")

    products = [product_from_row(r) for r in raw if isinstance(r, Mapping)]
    logger.info("Loaded %d products from %s", len(products), path)
    return products


# ---------------- Hosted backend ----------------
class HostedCatalog:
    """Approved, active products from the hosted REST API, cached on disk for a few minutes."""

    def __init__(self, settings: Settings, http: Optional[Http] = None, cache: Optional[DiskCache] = None):
        if not settings.has_hosted_catalog:
            raise ProviderError("PARTMATCH_SUPABASE_URL and PARTMATCH_SUPABASE_KEY must be set")
        self.settings = settings
        self.http = http or Http()
        self.cache = cache or DiskCache(dir=settings.cache_dir, ttl_minutes=settings.cache_ttl_minutes)

    @property
    def endpoint(self) -> str:
        return f"{self.settings.supabase_url.rstrip('/')}/rest/v1/{self.settings.products_table}"

    def _headers(self) -> dict:
        key = self.settings.supabase_key
        return {"apikey": key, "Authorization": f"Bearer {key}"}

    def fetch_rows(self, limit: Optional[int] = None) -> List[Mapping[str, Any]]:
        params = {"select": SELECT_FIELDS, "status": "eq.approved", "is_active": "eq.true"}
        if limit:
            params["limit"] = str(limit)

        cache_key = f"{self.endpoint}|{sorted(params.items())}"
        hit = self.cache.get(cache_key)
        if hit is not None:
            logger.info("Catalog served from cache (%d rows)", len(hit))
            return hit

        rows = self.http.get_json(self.endpoint, params=params, headers=self._headers())
        if not isinstance(rows, list):
            raise ProviderError(f"{self.endpoint}: expected a JSON array, got {type(rows).__name__}")
        logger.info("Fetched %d catalog rows from %s", len(rows), self.endpoint)
        self.cache.set(cache_key, rows)
        return rows

    def fetch_products(self, limit: Optional[int] = None) -> List[Product]:
        return [product_from_row(r) for r in self.fetch_rows(limit) if isinstance(r, Mapping)]
