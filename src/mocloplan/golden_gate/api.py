from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..records import PartRecord


@dataclass(frozen=True)
class GoldenGatePart:
    """Assembly view of a part: its type and the overhangs bounding it."""

    id: str
    name: str
    part_type: str   # promoter | cds | terminator | backbone | connector | other
    level: int
    left_overhang: str
    right_overhang: str
    sequence: Optional[str] = None
    compatible: bool = False
    position: Optional[int] = None


@dataclass(frozen=True)
class GoldenGateStrategy:
    level: int
    parts: List[GoldenGatePart]
    backbone: GoldenGatePart
    assembly_order: List[str]
    warnings: List[str] = field(default_factory=list)
    conflicts: List[str] = field(default_factory=list)
    efficiency: str = "medium"  # high | medium | low

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExpectedProduct:
    size: int
    overhangs: List[str]
    circularized: bool = True


@dataclass(frozen=True)
class AssemblyReaction:
    enzyme: str
    parts: List[GoldenGatePart]
    expected_product: ExpectedProduct
    efficiency: float
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AssemblyDesigner(Protocol):
    """Stable interface for Golden Gate strategy design backends."""

    def analyze_part_compatibility(
        self, parts: Sequence[PartRecord], enzyme: Optional[str] = None
    ) -> GoldenGateStrategy:
        ...

    def generate_assembly_reaction(self, strategy: GoldenGateStrategy, enzyme: str = "BsaI") -> AssemblyReaction:
        ...

    def suggest_optimal_overhangs(self, part_types: Sequence[str], level: int = 0) -> Dict[str, Dict[str, str]]:
        ...
