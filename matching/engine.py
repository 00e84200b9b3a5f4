# matching/engine.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pandas as pd

from domain.vehicle import ParsedQuery, Product, ScoredProduct, VehicleDescriptor
from matching.compatibility import compatibility_score
from matching.query_parser import parse_search_query

logger = logging.getLogger(__name__)

# ---------------- Weights ----------------
BASE_RELEVANCE = 1.0
VEHICLE_TEXT_HIT = 2.0
TERM_IN_NAME = 1.5
TERM_IN_DESCRIPTION = 1.0
EXACT_SKU_BOOST = 10.0
EXACT_PART_NUMBER_BOOST = 8.0

RESULT_COLUMNS = [
    "id", "name", "description", "price", "stock_quantity",
    "relevance_score", "compatibility_score", "score",
]


# ---------------- Text relevance ----------------
def relevance_score(product: Product, parsed: ParsedQuery) -> float:
    name = (product.name or "").lower()
    desc = (product.description or "").lower()
    score = BASE_RELEVANCE

    for value in parsed.vehicle_info.parts():
        if value in name or value in desc:
            score += VEHICLE_TEXT_HIT
    for term in parsed.search_terms:
        if term in name:
            score += TERM_IN_NAME
        elif term in desc:
            score += TERM_IN_DESCRIPTION

    q = parsed.original_query
    if q:
        if product.sku and q == product.sku.lower():
            score += EXACT_SKU_BOOST
        if product.part_number and q == product.part_number.lower():
            score += EXACT_PART_NUMBER_BOOST
    return score


def score_product(product: Product, query: Optional[str], parsed: Optional[ParsedQuery] = None) -> ScoredProduct:
    parsed = parsed if parsed is not None else parse_search_query(query)
    return ScoredProduct(
        product=product,
        relevance_score=relevance_score(product, parsed),
        compatibility_score=float(compatibility_score(product, parsed)),
    )


# ---------------- Ranking ----------------
def rank_products(query: Optional[str], products: Iterable[Product], limit: Optional[int] = None) -> List[ScoredProduct]:
    """[ScoredProduct] sorted by relevance + compatibility, ties keep catalog order"""
    parsed = parse_search_query(query)
    logger.debug("Parsed search %r -> %s", query, parsed.to_dict())

    scored = [score_product(p, query, parsed) for p in products]
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)
    if ranked:
        top = ranked[0]
        logger.debug("Ranked %d products, top %r (score=%.1f)", len(ranked), top.product.name, top.score)
    return ranked[:limit] if limit is not None else ranked


def rank_catalog(query: Optional[str], products: Iterable[Product], top_n: Optional[int] = None) -> pd.DataFrame:
    parsed = parse_search_query(query)
    rows = []
    for p in products:
        s = score_product(p, query, parsed)
        rows.append({
            "id": p.id,
            "name": p.name,
            "description": p.description,
            "price": p.price,
            "stock_quantity": p.stock_quantity,
            "relevance_score": s.relevance_score,
            "compatibility_score": s.compatibility_score,
            "score": s.score,
        })
    if not rows:
        return pd.DataFrame(columns=RESULT_COLUMNS)

    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    # mergesort is the stable one
    df = df.sort_values("score", ascending=False, kind="mergesort").reset_index(drop=True)
    return df.head(top_n) if top_n is not None else df


# ---------------- Structured vehicle search ----------------
def build_vehicle_query(vehicle: VehicleDescriptor, product_query: str = "") -> str:
    terms = vehicle.parts()
    if product_query:
        terms.append(product_query)
    return " ".join(terms)


def search_by_vehicle(
    products: Iterable[Product],
    vehicle: VehicleDescriptor,
    product_query: str = "",
    limit: Optional[int] = None,
) -> List[ScoredProduct]:
    return rank_products(build_vehicle_query(vehicle, product_query), products, limit=limit)
