from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Enzyme:
    """Type IIS enzyme geometry.

    Cut offsets are counted in bases from the first base of the recognition
    motif on the top strand.
    """

    name: str
    recognition_site: str
    cut_offset_forward: int
    cut_offset_reverse: int
    overhang_length: int


# name, motif, top-strand offset, bottom-strand offset, overhang length
_CATALOG_ROWS: Tuple[Tuple[str, str, int, int, int], ...] = (
    ("BsaI", "GGTCTC", 1, 5, 4),
    ("BbsI", "GAAGAC", 2, 6, 4),
    ("BsmBI", "CGTCTC", 1, 5, 4),
    ("Esp3I", "CGTCTC", 1, 5, 4),
    ("SapI", "GCTCTTC", 1, 4, 3),
    ("BpiI", "GAAGAC", 2, 6, 4),
    ("AarI", "CACCTGC", 4, 8, 4),
    ("BtsI", "GCAGTG", 2, 8, 6),
)

MOCLO_ENZYMES: Tuple[Enzyme, ...] = tuple(Enzyme(*row) for row in _CATALOG_ROWS)

_BY_NAME: Dict[str, Enzyme] = {e.name.lower(): e for e in MOCLO_ENZYMES}


def get_enzyme(name: str) -> Optional[Enzyme]:
    return _BY_NAME.get(str(name).strip().lower())


def enzyme_names() -> List[str]:
    return [e.name for e in MOCLO_ENZYMES]
