from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .enzymes import get_enzyme
from .inserts import InsertCandidate, find_insert_regions
from .overhangs import OverhangValidationResult, collect_overhangs, validate_overhangs
from .sites import T2SSite, analyze_all_enzymes

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class SequenceAnalysis:
    """Uniform result of a full catalog scan of one sequence."""

    sites: Dict[str, List[T2SSite]]
    inserts: List[InsertCandidate]
    validation: OverhangValidationResult
    insert_enzyme: str = "BsaI"
    schema_version: int = SCHEMA_VERSION

    def all_sites(self) -> List[T2SSite]:
        out: List[T2SSite] = []
        for sites in self.sites.values():
            out.extend(sites)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "insert_enzyme": self.insert_enzyme,
            "sites": {name: [s.to_dict() for s in sites] for name, sites in self.sites.items()},
            "inserts": [c.to_dict() for c in self.inserts],
            "validation": self.validation.to_dict(),
        }


def analyze_sequence(sequence: str, insert_enzyme: str = "BsaI") -> SequenceAnalysis:
    sites = analyze_all_enzymes(sequence)
    enzyme = get_enzyme(insert_enzyme)
    inserts = find_insert_regions(sequence, enzyme) if enzyme is not None else []
    return SequenceAnalysis(
        sites=sites,
        inserts=inserts,
        validation=validate_overhangs(collect_overhangs(sites)),
        insert_enzyme=enzyme.name if enzyme is not None else insert_enzyme,
    )
