"""Fixed MoClo reference data used by the designer."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

LEVEL0_OVERHANGS: Mapping[str, str] = MappingProxyType({
    "GGAG": "promoter_start",
    "TACT": "promoter_end_cds_start",
    "AATG": "cds_start",
    "GCTT": "cds_end_terminator_start",
    "CGCT": "terminator_end",
})

LEVEL1_OVERHANGS: Mapping[str, str] = MappingProxyType({
    "GCCA": "level1_start",
    "CCGA": "level1_connector_1",
    "TCCA": "level1_connector_2",
    "GCCG": "level1_connector_3",
    "TCCG": "level1_end",
})

STANDARD_OVERHANGS = frozenset(LEVEL0_OVERHANGS) | frozenset(LEVEL1_OVERHANGS)

# both members present anywhere in a part set -> one warning
PROBLEMATIC_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("AAAA", "TTTT"),
    ("CCCC", "GGGG"),
    ("AGCT", "TCGA"),
    ("GATC", "CTAG"),
)

PART_TYPE_VOCABULARY: Mapping[str, str] = MappingProxyType({
    "promoter": "promoter",
    "cds": "cds",
    "coding_sequence": "cds",
    "terminator": "terminator",
    "backbone": "backbone",
    "vector": "backbone",
    "connector": "connector",
})

TYPE_PRIORITY: Mapping[str, int] = MappingProxyType({
    "backbone": 0,
    "promoter": 1,
    "cds": 2,
    "terminator": 3,
    "connector": 4,
    "other": 5,
})

BASIC_PART_TYPES = frozenset({"promoter", "cds", "terminator"})
TRANSCRIPTION_UNIT = "transcription_unit"

SENTINEL_OVERHANG = "NNNN"

DEFAULT_BACKBONE_ID = "default_backbone"
DEFAULT_BACKBONE_NAME = "Default Backbone"
DEFAULT_BACKBONE_OVERHANGS = ("CGCT", "GGAG")

EFFICIENCY_VALUES: Mapping[str, float] = MappingProxyType({
    "high": 0.9,
    "medium": 0.7,
    "low": 0.4,
})

SUGGESTED_OVERHANGS: Mapping[int, Mapping[str, Tuple[str, str]]] = MappingProxyType({
    0: MappingProxyType({
        "promoter": ("GGAG", "TACT"),
        "cds": ("AATG", "GCTT"),
        "terminator": ("GCTT", "CGCT"),
        "backbone": ("CGCT", "GGAG"),
    }),
    1: MappingProxyType({
        "transcription_unit": ("GCCA", "CCGA"),
        "backbone": ("TCCG", "GCCA"),
    }),
})


def suggestions_for_level(level: int) -> Dict[str, Dict[str, str]]:
    table = SUGGESTED_OVERHANGS.get(level, {})
    return {part: {"left": left, "right": right} for part, (left, right) in table.items()}
