"""mocloplan: Type IIS site analysis and MoClo Golden Gate assembly planning."""

from .type_iis import (
    Enzyme,
    MOCLO_ENZYMES,
    get_enzyme,
    T2SSite,
    find_sites,
    analyze_all_enzymes,
    InsertCandidate,
    Insert,
    find_insert_regions,
    extract_inserts,
    OverhangValidationResult,
    validate_overhangs,
    SequenceAnalysis,
    analyze_sequence,
)
from .golden_gate import (
    GoldenGatePart,
    GoldenGateStrategy,
    AssemblyReaction,
    GoldenGateDesigner,
    analyze_part_compatibility,
    generate_assembly_reaction,
    suggest_optimal_overhangs,
)
from .records import PartRecord, Folder, PartFeature

__version__ = "0.1.0"
__all__ = [
    "Enzyme",
    "MOCLO_ENZYMES",
    "get_enzyme",
    "T2SSite",
    "find_sites",
    "analyze_all_enzymes",
    "InsertCandidate",
    "Insert",
    "find_insert_regions",
    "extract_inserts",
    "OverhangValidationResult",
    "validate_overhangs",
    "SequenceAnalysis",
    "analyze_sequence",
    "GoldenGatePart",
    "GoldenGateStrategy",
    "AssemblyReaction",
    "GoldenGateDesigner",
    "analyze_part_compatibility",
    "generate_assembly_reaction",
    "suggest_optimal_overhangs",
    "PartRecord",
    "Folder",
    "PartFeature",
]
