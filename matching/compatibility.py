# matching/compatibility.py
from __future__ import annotations

import re
from typing import List, Optional

from domain.vehicle import CompatibilityRecord, ParsedQuery, Product, VehicleDescriptor
from matching.query_parser import parse_search_query
from matching.reference_data import MAKE_MODELS, MAKE_VARIATIONS

FIELD_MATCH_POINTS = 3
SPECIFIC_BONUS = 5

_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


# ---------------- Scoring ----------------
def record_score(record: CompatibilityRecord, vehicle: VehicleDescriptor) -> int:
    """Points one fitment record earns against a parsed vehicle (0..14)."""
    pts = 0
    if vehicle.year and record.year == vehicle.year:
        pts += FIELD_MATCH_POINTS
    if vehicle.make and record.make == vehicle.make:
        pts += FIELD_MATCH_POINTS
    if vehicle.model and record.model == vehicle.model:
        pts += FIELD_MATCH_POINTS
    if (
        record.match_type == "specific"
        and vehicle.year and vehicle.make and vehicle.model
        and (record.year, record.make, record.model) == (vehicle.year, vehicle.make, vehicle.model)
    ):
        pts += SPECIFIC_BONUS
    return pts


def compatibility_score(product: Product, parsed: ParsedQuery) -> int:
    if not parsed.has_vehicle_info:
        return 0
    # best single record wins; many rows must not add up
    return max((record_score(r, parsed.vehicle_info) for r in product.vehicle_compatibility), default=0)


def score_compatibility(product: Product, query: Optional[str]) -> int:
    return compatibility_score(product, parse_search_query(query))


# ---------------- Inference ----------------
def _records_for(make: str, models: List[str], years: List[str]) -> List[CompatibilityRecord]:
    if models:
        if years:
            return [CompatibilityRecord(y, make, m, "specific") for m in models for y in years]
        return [CompatibilityRecord(None, make, m, "model") for m in models]
    if years:
        return [CompatibilityRecord(y, make, None, "make_year") for y in years]
    return [CompatibilityRecord(None, make, None, "make")]


def infer_compatibility(name: Optional[str], description: Optional[str]) -> List[CompatibilityRecord]:
    """
    Guess fitment records from product copy when the catalog row has none.

    Makes are found through MAKE_VARIATIONS, models through the make's entry in
    MAKE_MODELS, years with a 19xx/20xx pattern. Text with years but no make
    yields bare "year" records.
    """
    text = f"{(name or '').lower()} {(description or '').lower()}"
    years = list(dict.fromkeys(_YEAR_RE.findall(text)))

    out: List[CompatibilityRecord] = []
    for make, variations in MAKE_VARIATIONS.items():
        if not any(v in text for v in variations):
            continue
        models = [m for m in MAKE_MODELS.get(make, ()) if m in text]
        out.extend(_records_for(make, models, years))

    if not out and years:
        out = [CompatibilityRecord(y, None, None, "year") for y in years]
    return out

