"""Type IIS site analysis: enzyme catalog, site finding, inserts and overhang checks."""

from .enzymes import Enzyme, MOCLO_ENZYMES, get_enzyme, enzyme_names
from .sites import T2SSite, find_sites, analyze_all_enzymes
from .inserts import Insert, InsertCandidate, find_insert_regions, extract_inserts
from .overhangs import OverhangValidationResult, validate_overhangs, collect_overhangs
from .analysis import SequenceAnalysis, analyze_sequence

__all__ = [
    "Enzyme",
    "MOCLO_ENZYMES",
    "get_enzyme",
    "enzyme_names",
    "T2SSite",
    "find_sites",
    "analyze_all_enzymes",
    "Insert",
    "InsertCandidate",
    "find_insert_regions",
    "extract_inserts",
    "OverhangValidationResult",
    "validate_overhangs",
    "collect_overhangs",
    "SequenceAnalysis",
    "analyze_sequence",
]
