from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from .dna import gc_fraction, is_palindromic
from .sites import T2SSite

GC_MIN = 0.25
GC_MAX = 0.75


@dataclass(frozen=True)
class OverhangValidationResult:
    valid: bool
    conflicts: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_overhangs(overhangs: Sequence[str]) -> OverhangValidationResult:
    """
    Check a set of overhangs for duplicates (conflicts), palindromes and
    extreme GC content (warnings). Warnings never affect validity.
    """
    conflicts: List[str] = []
    warnings: List[str] = []

    # one conflict per repeat, so a triple yields two
    seen = set()
    for oh in overhangs:
        if oh in seen:
            conflicts.append(f"Duplicate overhang: {oh}")
        seen.add(oh)

    for oh in overhangs:
        if is_palindromic(oh):
            warnings.append(f"Palindromic overhang: {oh} (may cause multiple assembly products)")

    for oh in overhangs:
        if not oh:
            continue
        gc = gc_fraction(oh)
        if gc < GC_MIN or gc > GC_MAX:
            warnings.append(f"Overhang {oh} has extreme GC content ({gc * 100:.1f}%)")

    return OverhangValidationResult(valid=not conflicts, conflicts=conflicts, warnings=warnings)


def collect_overhangs(sites_by_enzyme: Mapping[str, Iterable[T2SSite]]) -> List[str]:
    out: List[str] = []
    for sites in sites_by_enzyme.values():
        out.extend(s.overhang_sequence for s in sites)
    return out
