# matching/reference_data.py
# Fixed lookup tables for query parsing, compatibility inference and suggestions.
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

# ---------------- Year window ----------------
MIN_YEAR = 1990
YEAR_LOOKAHEAD = 2  # model years run ahead of the calendar

# ---------------- Makes ----------------
VEHICLE_MAKES: Tuple[str, ...] = (
    "toyota", "honda", "ford", "chevrolet", "chevy", "nissan", "bmw", "mercedes", "mercedes-benz",
    "audi", "volkswagen", "vw", "hyundai", "kia", "subaru", "mazda", "mitsubishi", "lexus",
    "acura", "infiniti", "cadillac", "buick", "gmc", "jeep", "chrysler", "dodge", "ram",
    "volvo", "porsche", "jaguar", "land rover", "mini", "fiat", "alfa romeo", "tesla",
)

MAKE_ALIASES: Mapping[str, str] = MappingProxyType({
    "chevy": "chevrolet",
    "vw": "volkswagen",
    "mercedes": "mercedes-benz",
})

# ---------------- Models ----------------
COMMON_MODELS: frozenset = frozenset({
    "corolla", "camry", "prius", "rav4", "highlander", "sienna", "tacoma", "tundra",
    "civic", "accord", "cr-v", "pilot", "odyssey", "ridgeline",
    "focus", "fusion", "escape", "explorer", "f-150", "f150", "mustang",
    "malibu", "impala", "equinox", "tahoe", "silverado", "corvette",
    "altima", "sentra", "rogue", "pathfinder", "frontier", "titan",
    "series", "3-series", "5-series", "7-series", "x1", "x3", "x5", "x7",
})

# ---------------- Part vocabulary ----------------
AUTO_PART_TERMS: frozenset = frozenset({
    "battery", "brake", "brakes", "pad", "pads", "rotor", "rotors", "filter", "filters",
    "oil", "engine", "transmission", "alternator", "starter", "radiator", "coolant",
    "spark", "plug", "plugs", "belt", "hose", "pump", "sensor", "light", "headlight",
    "taillight", "bulb", "fuse", "relay", "switch", "motor", "compressor", "clutch",
    "tire", "tires", "wheel", "wheels", "suspension", "shock", "strut", "spring",
    "exhaust", "muffler", "catalytic", "converter", "gasket", "seal", "bearing",
    "fluid", "antifreeze", "windshield", "wiper", "wipers", "mirror", "door", "handle",
})

# Suggestion phrases, in display order
COMMON_PARTS: Tuple[str, ...] = (
    "battery", "brake pads", "oil filter", "air filter", "spark plugs",
    "alternator", "starter", "radiator", "headlight", "taillight",
    "tire", "wheel", "engine oil", "transmission fluid", "coolant",
    "brake fluid", "power steering fluid", "windshield wipers",
    "cabin filter", "fuel filter", "timing belt", "serpentine belt",
)

# ---------------- Inference tables ----------------
# canonical make -> spellings found in product copy
MAKE_VARIATIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "toyota": ("toyota", "toyot"),
    "honda": ("honda",),
    "ford": ("ford",),
    "chevrolet": ("chevrolet", "chevy", "chev"),
    "nissan": ("nissan", "datsun"),
    "bmw": ("bmw",),
    "mercedes-benz": ("mercedes", "mercedes-benz", "merc"),
    "audi": ("audi",),
    "volkswagen": ("volkswagen", "vw", "volks"),
    "hyundai": ("hyundai",),
    "kia": ("kia",),
    "subaru": ("subaru",),
    "mazda": ("mazda",),
    "mitsubishi": ("mitsubishi",),
    "lexus": ("lexus",),
    "acura": ("acura",),
    "infiniti": ("infiniti",),
    "volvo": ("volvo",),
    "porsche": ("porsche",),
    "jaguar": ("jaguar", "jag"),
    "jeep": ("jeep",),
    "dodge": ("dodge",),
    "chrysler": ("chrysler",),
    "buick": ("buick",),
    "cadillac": ("cadillac",),
    "gmc": ("gmc",),
    "ram": ("ram",),
})

MAKE_MODELS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "toyota": ("corolla", "camry", "prius", "rav4", "highlander", "sienna", "tacoma", "tundra",
               "4runner", "sequoia", "land cruiser", "yaris", "avalon"),
    "honda": ("civic", "accord", "cr-v", "pilot", "odyssey", "ridgeline", "fit", "hr-v", "passport", "insight"),
    "ford": ("focus", "fusion", "escape", "explorer", "f-150", "f150", "mustang", "edge", "expedition",
             "ranger", "fiesta"),
    "chevrolet": ("malibu", "impala", "equinox", "tahoe", "silverado", "corvette", "cruze", "sonic", "trax",
                  "traverse"),
    "nissan": ("altima", "sentra", "rogue", "pathfinder", "frontier", "titan", "versa", "murano", "armada",
               "maxima"),
    "bmw": ("3-series", "5-series", "7-series", "x1", "x3", "x5", "x7", "z4", "i3", "i8"),
    "mercedes-benz": ("c-class", "e-class", "s-class", "glc", "gle", "gls", "a-class", "cla", "gla"),
    "audi": ("a3", "a4", "a6", "a8", "q3", "q5", "q7", "q8", "tt", "r8"),
    "volkswagen": ("jetta", "passat", "golf", "tiguan", "atlas", "beetle", "arteon"),
    "hyundai": ("elantra", "sonata", "tucson", "santa fe", "accent", "veloster", "genesis"),
    "kia": ("optima", "forte", "soul", "sportage", "sorento", "rio", "stinger", "telluride"),
})
