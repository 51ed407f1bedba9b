from .api import GoldenGatePart, GoldenGateStrategy, ExpectedProduct, AssemblyReaction, AssemblyDesigner
from .designer import (
    GoldenGateDesigner,
    analyze_part_compatibility,
    generate_assembly_reaction,
    suggest_optimal_overhangs,
)

__all__ = [
    "GoldenGatePart",
    "GoldenGateStrategy",
    "ExpectedProduct",
    "AssemblyReaction",
    "AssemblyDesigner",
    "GoldenGateDesigner",
    "analyze_part_compatibility",
    "generate_assembly_reaction",
    "suggest_optimal_overhangs",
]
