# matching/query_parser.py
"""
Free-text search parser.

Pulls a year / make / model triple out of a storefront search string and keeps
the leftover words as product terms. Stages run in a fixed order (year, make,
model) and each one consumes the token it claims, so a word is never used twice.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional

from domain.vehicle import FALLBACK_TERMS, ParsedQuery, VehicleDescriptor
from matching.reference_data import (
    AUTO_PART_TERMS,
    COMMON_MODELS,
    MAKE_ALIASES,
    MIN_YEAR,
    VEHICLE_MAKES,
    YEAR_LOOKAHEAD,
)

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def _leading_int(word: str) -> Optional[int]:
    # "2017-2020" reads as 2017, "4x4" as 4
    m = _LEADING_INT.match(word)
    return int(m.group(0)) if m else None


def _is_year(word: str, current_year: int) -> bool:
    n = _leading_int(word)
    return n is not None and MIN_YEAR <= n <= current_year + YEAR_LOOKAHEAD


def _is_make(word: str) -> bool:
    if word in MAKE_ALIASES:
        return True
    # substring either way: "toyo" hits toyota, "frame" hits ram
    return any(make == word or word in make or make in word for make in VEHICLE_MAKES)


def _is_model(word: str) -> bool:
    # unknown words default to a model name unless they are part vocabulary
    return word in COMMON_MODELS or (len(word) > 2 and word not in AUTO_PART_TERMS)


def _take_first(words: List[str], pred) -> str:
    for w in words:
        if pred(w):
            words.remove(w)
            return w
    return ""


def parse_search_query(query: Optional[str], current_year: Optional[int] = None) -> ParsedQuery:
    if not query:
        return ParsedQuery()

    original = query.lower().strip()
    words = original.split()
    remaining = list(words)
    year_now = current_year if current_year is not None else dt.date.today().year

    year = _take_first(remaining, lambda w: _is_year(w, year_now))
    make = _take_first(remaining, _is_make)
    make = MAKE_ALIASES.get(make, make)
    model = _take_first(remaining, _is_model)

    vehicle = VehicleDescriptor(year=year, make=make, model=model)
    terms = [w for w in remaining if len(w) > 1]
    if not terms and vehicle.has_info:
        terms = list(FALLBACK_TERMS)

    return ParsedQuery(vehicle_info=vehicle, product_terms=tuple(terms), original_query=original)
