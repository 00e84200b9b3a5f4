# matching/suggestions.py
from __future__ import annotations

from typing import List, Optional

from matching.query_parser import parse_search_query
from matching.reference_data import COMMON_PARTS

MIN_QUERY_LEN = 2


def search_suggestions(query: Optional[str], limit: int = 8) -> List[str]:
    """
    Type-ahead completions for the search box.

    With a vehicle in the query every common part is offered for that vehicle,
    skipping parts the user already typed. Without one, parts that overlap the
    query text are offered as they are.
    """
    if not query or len(query) < MIN_QUERY_LEN:
        return []

    parsed = parse_search_query(query)
    if parsed.has_vehicle_info:
        vehicle = " ".join(parsed.vehicle_info.parts())
        out = [
            f"{vehicle} {part}"
            for part in COMMON_PARTS
            if not any(term in part for term in parsed.product_terms)
        ]
    else:
        q = query.lower()
        out = [part for part in COMMON_PARTS if part in q or q in part]
    return out[:limit]
