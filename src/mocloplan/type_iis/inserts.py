from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .dna import clamped_slice
from .enzymes import Enzyme
from .sites import find_sites

INSERT_PART_TYPES = ("promoter", "cds", "terminator", "vector", "linker", "other")


@dataclass(frozen=True)
class InsertCandidate:
    start: int  # 0-based
    end: int    # 0-based, exclusive
    left_overhang: str
    right_overhang: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Insert:
    """Insert candidate materialized against its parent sequence."""

    id: str
    sequence: str
    start: int
    end: int
    left_overhang: Optional[str]
    right_overhang: Optional[str]
    moclo_level: int
    part_type: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Insert":
        return cls(
            id=str(d.get("id", "")),
            sequence=str(d.get("sequence", "")),
            start=int(d.get("start", 0)),
            end=int(d.get("end", 0)),
            left_overhang=d.get("left_overhang"),
            right_overhang=d.get("right_overhang"),
            moclo_level=int(d.get("moclo_level", 0)),
            part_type=str(d.get("part_type", "other")),
        )


def find_insert_regions(sequence: str, enzyme: Enzyme) -> List[InsertCandidate]:
    """
    Regions between consecutive sites of one enzyme, in position order.
    Only adjacent pairs are considered; empty or inverted spans are dropped.
    """
    sites = find_sites(sequence, enzyme)
    out: List[InsertCandidate] = []
    for left, right in zip(sites[:-1], sites[1:]):
        start = max(left.cut_position_top, left.cut_position_bottom)
        end = min(right.cut_position_top, right.cut_position_bottom)
        if end > start:
            out.append(
                InsertCandidate(
                    start=start,
                    end=end,
                    left_overhang=left.overhang_sequence,
                    right_overhang=right.overhang_sequence,
                )
            )
    return out


def extract_inserts(
    sequence: str,
    enzyme: Enzyme,
    moclo_level: int = 0,
    part_type: str = "other",
    id_prefix: str = "insert",
) -> List[Insert]:
    if part_type not in INSERT_PART_TYPES:
        part_type = "other"
    seq = sequence.upper()
    out: List[Insert] = []
    for idx, c in enumerate(find_insert_regions(seq, enzyme), start=1):
        out.append(
            Insert(
                id=f"{id_prefix}_{enzyme.name}_{idx}",
                sequence=clamped_slice(seq, c.start, c.end),
                start=c.start,
                end=c.end,
                left_overhang=c.left_overhang,
                right_overhang=c.right_overhang,
                moclo_level=moclo_level,
                part_type=part_type,
            )
        )
    return out
