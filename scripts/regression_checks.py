# scripts/regression_checks.py
from __future__ import annotations

from typing import Dict, List

from domain.vehicle import Product, ScoredProduct
from matching.compatibility import score_compatibility
from matching.engine import rank_products
from matching.query_parser import parse_search_query
from services.catalog import load_catalog

OK = "✅"
BAD = "❌"


def _print(title: str):
    print(f"\n=== {title} ===")


def assert_true(cond: bool, msg_ok: str, msg_bad: str):
    print((OK if cond else BAD), msg_ok if cond else msg_bad)
    if not cond:
        raise SystemExit(2)


def show_items(items: List[ScoredProduct]):
    for i, it in enumerate(items, 1):
        print(f"{i}. {it.product.name} | score={it.score:.1f} "
              f"(relevance={it.relevance_score:.1f}, compatibility={it.compatibility_score:.0f})")


def main(path: str | None = None):
    catalog: List[Product] = load_catalog(path)
    by_id: Dict[int, Product] = {p.id: p for p in catalog}

    # 1) exact year/make/model
    _print("2017 Toyota Corolla")
    q = "2017 Toyota Corolla"
    show_items(rank_products(q, catalog))
    scores = {pid: score_compatibility(p, q) for pid, p in by_id.items()}
    print("compatibility:", scores)
    assert_true(scores[1] == 14 and scores[3] == 14, "Corolla battery and pads score 14", "Corolla products should score 14")
    assert_true(scores[2] == 3, "Universal battery scores 3 (make only)", "Universal battery should score 3")
    assert_true(scores[4] == 0, "Civic filter scores 0", "Civic filter should score 0")
    assert_true(scores[5] == 3, "F-150 filter scores 3 (its 2017 record matches the year)", "F-150 filter should score 3")

    # 2) make + model + part terms
    _print("Honda Civic brake pads")
    q = "Honda Civic brake pads"
    parsed = parse_search_query(q)
    print("parsed:", parsed.to_dict())
    assert_true(
        parsed.vehicle_info.to_dict() == {"year": "", "make": "honda", "model": "civic"}
        and parsed.product_terms == ("brake", "pads"),
        "Vehicle and part terms split correctly",
        "Unexpected parse",
    )
    assert_true(score_compatibility(by_id[4], q) == 6, "Civic filter scores 6 (make+model)", "Civic filter should score 6")
    show_items(rank_products(q, catalog, limit=3))

    # 3) aliases
    _print("Make aliases")
    for text, make in [("chevy silverado", "chevrolet"), ("vw golf", "volkswagen"), ("mercedes c300", "mercedes-benz")]:
        got = parse_search_query(text).vehicle_info.make
        assert_true(got == make, f"{text!r} -> {got}", f"{text!r} -> {got!r}, expected {make}")

    # 4) no vehicle, no bonus
    _print("Parts-only query")
    q = "brake pads"
    assert_true(not parse_search_query(q).has_vehicle_info, "No vehicle info", "Vehicle info found in a parts-only query")
    assert_true(all(score_compatibility(p, q) == 0 for p in catalog), "All compatibility scores are 0", "Non-zero compatibility")

    print("\nALL REGRESSION CHECKS PASSED ✅")


if __name__ == "__main__":
    main()
