"""
pH reference palette and nearest-colour matcher.

The palette is a fixed table of fifteen universal-indicator colours, one per
integer pH. A sampled colour is classified by plain Euclidean distance in RGB
space; there is no interpolation between neighbouring levels and no
confidence cut-off, so every colour maps to exactly one pH.
"""
from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Optional, Tuple

import numpy as np
from scipy.spatial import distance as dist

from utils_color import hex_to_rgb, rgb_to_hex

RGB = Tuple[int, int, int]

@dataclass(frozen=True)
class ReferenceEntry:
    ph: int
    color: str
    description: str

    @property
    def rgb(self) -> RGB:
        return hex_to_rgb(self.color)

PH_COLOR_MAP = (
    ReferenceEntry(0, "#ff0000", "Strong acid"),
    ReferenceEntry(1, "#ff3300", "Very strong acid"),
    ReferenceEntry(2, "#ff6600", "Strong acid"),
    ReferenceEntry(3, "#ff9900", "Moderate acid"),
    ReferenceEntry(4, "#ffcc00", "Moderate acid"),
    ReferenceEntry(5, "#ffff00", "Weak acid"),
    ReferenceEntry(6, "#ccff00", "Weak acid"),
    ReferenceEntry(7, "#00ff00", "Neutral"),
    ReferenceEntry(8, "#00ccff", "Weak base"),
    ReferenceEntry(9, "#0066ff", "Weak base"),
    ReferenceEntry(10, "#0000ff", "Moderate base"),
    ReferenceEntry(11, "#6600cc", "Moderate base"),
    ReferenceEntry(12, "#990099", "Strong base"),
    ReferenceEntry(13, "#cc0066", "Very strong base"),
    ReferenceEntry(14, "#ff0033", "Strong base"),
)

# Sparse: 0, 11 and 13 have no everyday example
PH_EXAMPLES = MappingProxyType({
    1: "Stomach acid",
    2: "Lemon juice",
    3: "Vinegar",
    4: "Orange juice",
    5: "Black coffee",
    6: "Urine",
    7: "Pure water",
    8: "Sea water",
    9: "Baking soda",
    10: "Milk of magnesia",
    12: "Household bleach",
    14: "Drain cleaner",
})

def _check_tables():
    phs = [e.ph for e in PH_COLOR_MAP]
    if phs != list(range(15)):
        raise RuntimeError(f"pH palette must list 0..14 in order, got {phs}")
    orphans = set(PH_EXAMPLES) - set(phs)
    if orphans:
        raise RuntimeError(f"Examples for unknown pH values: {sorted(orphans)}")

_check_tables()

_BY_PH = MappingProxyType({e.ph: e for e in PH_COLOR_MAP})
# Row order == ascending pH, which is what the tie-break relies on
_PALETTE = np.array([e.rgb for e in PH_COLOR_MAP], dtype=np.float64)
_PALETTE.setflags(write=False)


@dataclass(frozen=True)
class AnalysisResult:
    color: str
    ph: int
    description: str
    example: Optional[str]
    reference_color: str
    distance: float

    def to_dict(self):
        return asdict(self)


def _nearest(rgb):
    point = np.asarray(rgb, dtype=np.float64).reshape(1, 3)
    d = dist.cdist(point, _PALETTE, "euclidean")[0]
    idx = int(np.argmin(d))
    return PH_COLOR_MAP[idx], float(d[idx])

def match_ph(rgb) -> int:
    """
    Return the pH whose reference colour is closest to ``rgb``.

    Exact ties go to the lower pH: ``argmin`` keeps the first minimum and the
    palette rows are in ascending pH order.
    """
    entry, _ = _nearest(rgb)
    return entry.ph

def get_ph_description(ph) -> str:
    entry = _BY_PH.get(ph)
    return entry.description if entry else ""

def get_ph_example(ph) -> Optional[str]:
    return PH_EXAMPLES.get(ph)

def get_reference_color(ph) -> str:
    entry = _BY_PH.get(ph)
    return entry.color if entry else ""

def analyze_color(rgb) -> AnalysisResult:
    r, g, b = (int(c) for c in rgb)
    entry, distance = _nearest((r, g, b))
    ph = entry.ph
    return AnalysisResult(
        color=rgb_to_hex(r, g, b),
        ph=ph,
        description=get_ph_description(ph),
        example=get_ph_example(ph),
        reference_color=entry.color,
        distance=round(distance, 3),
    )

def reference_chart():
    return {
        "palette": [
            {"ph": e.ph, "color": e.color, "description": e.description}
            for e in PH_COLOR_MAP
        ],
        "examples": [
            {"ph": ph, "example": text, "color": get_reference_color(ph)}
            for ph, text in PH_EXAMPLES.items()
        ],
    }
