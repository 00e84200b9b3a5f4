from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

MatchType = Literal["specific", "make", "model", "make_year", "year"]

FALLBACK_TERMS: Tuple[str, ...] = ("parts", "accessories")


@dataclass(frozen=True)
class VehicleDescriptor:
    year: str = ""
    make: str = ""
    model: str = ""

    @property
    def has_info(self) -> bool:
        return bool(self.year or self.make or self.model)

    def parts(self) -> List[str]:
        """year / make / model, only the non-empty ones, in that order"""
        return [v for v in (self.year, self.make, self.model) if v]

    def to_dict(self) -> Dict[str, str]:
        return {"year": self.year, "make": self.make, "model": self.model}


@dataclass(frozen=True)
class ParsedQuery:
    vehicle_info: VehicleDescriptor = field(default_factory=VehicleDescriptor)
    product_terms: Tuple[str, ...] = ()
    original_query: str = ""

    @property
    def has_vehicle_info(self) -> bool:
        return self.vehicle_info.has_info

    @property
    def search_terms(self) -> List[str]:
        # fallback terms are catalog filler, they never score
        return [t for t in self.product_terms if t not in FALLBACK_TERMS]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vehicleInfo": self.vehicle_info.to_dict(),
            "productTerms": list(self.product_terms),
            "originalQuery": self.original_query,
            "hasVehicleInfo": self.has_vehicle_info,
        }


def _opt_str(v: Any) -> Optional[str]:
    if v is None or v == "":
        return None
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return str(v)


@dataclass(frozen=True)
class CompatibilityRecord:
    year: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    match_type: Optional[MatchType] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CompatibilityRecord":
        # years often arrive as JSON numbers
        return cls(
            year=_opt_str(d.get("year")),
            make=_opt_str(d.get("make")),
            model=_opt_str(d.get("model")),
            match_type=_opt_str(d.get("matchType", d.get("match_type"))),
        )

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"year": self.year, "make": self.make, "model": self.model, "matchType": self.match_type}


@dataclass(frozen=True)
class Product:
    id: Any
    name: str = ""
    description: str = ""
    price: Optional[float] = None
    vehicle_compatibility: Tuple[CompatibilityRecord, ...] = ()
    sku: str = ""
    part_number: str = ""
    stock_quantity: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "sku": self.sku,
            "partNumber": self.part_number,
            "stockQuantity": self.stock_quantity,
            "vehicleCompatibility": [r.to_dict() for r in self.vehicle_compatibility],
        }


@dataclass(frozen=True)
class ScoredProduct:
    product: Product
    relevance_score: float
    compatibility_score: float

    @property
    def score(self) -> float:
        """final ranking key"""
        return self.relevance_score + self.compatibility_score

    def to_dict(self) -> Dict[str, Any]:
        d = self.product.to_dict()
        d.update(
            relevanceScore=self.relevance_score,
            compatibilityScore=self.compatibility_score,
            score=self.score,
        )
        return d
