from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple

from .dna import clamped_slice, find_all_overlapping, reverse_complement
from .enzymes import MOCLO_ENZYMES, Enzyme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class T2SSite:
    """One recognition-site occurrence, in forward-strand coordinates."""

    enzyme: str
    position: int            # 0-based start of the motif on the forward buffer
    strand: str              # "+" or "-"
    recognition_site: str    # motif text as matched on the forward buffer
    cut_position_top: int
    cut_position_bottom: int
    overhang_sequence: str   # 5'->3' on the strand it is read from
    overhang_type: str       # "5prime" or "3prime"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "T2SSite":
        return cls(
            enzyme=str(d.get("enzyme", "")),
            position=int(d.get("position", 0)),
            strand=str(d.get("strand", "+")),
            recognition_site=str(d.get("recognition_site", "")),
            cut_position_top=int(d.get("cut_position_top", 0)),
            cut_position_bottom=int(d.get("cut_position_bottom", 0)),
            overhang_sequence=str(d.get("overhang_sequence", "")),
            overhang_type=str(d.get("overhang_type", "5prime")),
        )


def _overhang(seq: str, cut_top: int, cut_bottom: int) -> Tuple[str, str]:
    if cut_top < cut_bottom:
        return clamped_slice(seq, cut_top, cut_bottom), "5prime"
    return clamped_slice(seq, cut_bottom, cut_top), "3prime"


def find_sites(sequence: str, enzyme: Enzyme) -> List[T2SSite]:
    """
    Locate every (overlapping) occurrence of the enzyme motif on both strands.

    The bottom strand is searched by scanning the forward buffer for the
    reverse-complement motif, so all coordinates share one frame. Cut
    coordinates are not wrapped around the origin: overhangs falling off
    either end of the buffer come back clipped or empty.
    """
    seq = sequence.upper()
    site = enzyme.recognition_site.upper()
    if not site:
        return []
    rc_site = reverse_complement(site)
    sites: List[T2SSite] = []

    for pos in find_all_overlapping(seq, site):
        cut_top = pos + enzyme.cut_offset_forward
        cut_bottom = pos + enzyme.cut_offset_reverse
        overhang, kind = _overhang(seq, cut_top, cut_bottom)
        sites.append(
            T2SSite(
                enzyme=enzyme.name,
                position=pos,
                strand="+",
                recognition_site=site,
                cut_position_top=cut_top,
                cut_position_bottom=cut_bottom,
                overhang_sequence=overhang,
                overhang_type=kind,
            )
        )

    n = len(rc_site)
    for pos in find_all_overlapping(seq, rc_site):
        cut_top = pos + n - enzyme.cut_offset_reverse
        cut_bottom = pos + n - enzyme.cut_offset_forward
        overhang, kind = _overhang(seq, cut_top, cut_bottom)
        sites.append(
            T2SSite(
                enzyme=enzyme.name,
                position=pos,
                strand="-",
                recognition_site=rc_site,
                cut_position_top=cut_top,
                cut_position_bottom=cut_bottom,
                overhang_sequence=reverse_complement(overhang),
                overhang_type=kind,
            )
        )

    # sorted() is stable: forward hits stay ahead of reverse hits at a shared position
    return sorted(sites, key=lambda s: s.position)


def analyze_all_enzymes(sequence: str) -> Dict[str, List[T2SSite]]:
    results: Dict[str, List[T2SSite]] = {}
    for enzyme in MOCLO_ENZYMES:
        sites = find_sites(sequence, enzyme)
        results[enzyme.name] = sites
        if sites:
            logger.debug(
                "Found %d %s site(s): %s",
                len(sites),
                enzyme.name,
                ", ".join(f"{s.position}({s.strand})" for s in sites),
            )
    logger.debug("Scanned %d bp against %d enzymes", len(sequence), len(MOCLO_ENZYMES))
    return results
