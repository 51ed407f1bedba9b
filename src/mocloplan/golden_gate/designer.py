from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..records import PartRecord
from ..type_iis.dna import is_palindromic
from ..type_iis.sites import T2SSite
from . import tables
from .api import AssemblyDesigner, AssemblyReaction, ExpectedProduct, GoldenGatePart, GoldenGateStrategy

logger = logging.getLogger(__name__)


def _norm_type(part_type: Optional[str]) -> str:
    return (part_type or "").strip().lower()


class GoldenGateDesigner(AssemblyDesigner):
    """Heuristic MoClo strategy design over a set of part records."""

    def analyze_part_compatibility(
        self, parts: Sequence[PartRecord], enzyme: Optional[str] = None
    ) -> GoldenGateStrategy:
        level = self._determine_level(parts)
        backbone = self._find_backbone(parts, enzyme)
        converted = [self._to_part(p, enzyme) for p in parts]

        conflicts, warnings = self._check_overhangs(converted)
        order = self._assembly_order(converted)
        rank = {part_id: i for i, part_id in enumerate(order)}
        converted = [replace(p, position=rank.get(p.id)) for p in converted]

        efficiency = self._efficiency(converted, conflicts, warnings)
        logger.debug(
            "Strategy: level=%d parts=%d conflicts=%d warnings=%d efficiency=%s",
            level, len(converted), len(conflicts), len(warnings), efficiency,
        )
        return GoldenGateStrategy(
            level=level,
            parts=converted,
            backbone=backbone,
            assembly_order=order,
            warnings=warnings,
            conflicts=conflicts,
            efficiency=efficiency,
        )

    def generate_assembly_reaction(self, strategy: GoldenGateStrategy, enzyme: str = "BsaI") -> AssemblyReaction:
        size = sum(len(p.sequence or "") for p in strategy.parts)
        overhangs: List[str] = []
        for p in strategy.parts:
            for oh in (p.left_overhang, p.right_overhang):
                if oh not in overhangs:
                    overhangs.append(oh)
        return AssemblyReaction(
            enzyme=enzyme,
            parts=list(strategy.parts),
            expected_product=ExpectedProduct(size=size, overhangs=overhangs, circularized=True),
            efficiency=tables.EFFICIENCY_VALUES.get(strategy.efficiency, tables.EFFICIENCY_VALUES["low"]),
            warnings=list(strategy.warnings),
        )

    def suggest_optimal_overhangs(self, part_types: Sequence[str], level: int = 0) -> Dict[str, Dict[str, str]]:
        return tables.suggestions_for_level(level)

    # -- steps ---------------------------------------------------------------

    def _determine_level(self, parts: Sequence[PartRecord]) -> int:
        types = {_norm_type(p.part_type) for p in parts}
        has_units = tables.TRANSCRIPTION_UNIT in types
        if types & tables.BASIC_PART_TYPES and not has_units:
            return 0
        if has_units:
            return 1
        return 2

    def _find_backbone(self, parts: Sequence[PartRecord], enzyme: Optional[str]) -> GoldenGatePart:
        for p in parts:
            name = (p.name or "").lower()
            if (
                _norm_type(p.part_type) == "backbone"
                or p.resistance
                or p.origin
                or "vector" in name
                or "backbone" in name
            ):
                return self._to_part(p, enzyme)

        left, right = tables.DEFAULT_BACKBONE_OVERHANGS
        return GoldenGatePart(
            id=tables.DEFAULT_BACKBONE_ID,
            name=tables.DEFAULT_BACKBONE_NAME,
            part_type="backbone",
            level=0,
            left_overhang=left,
            right_overhang=right,
            compatible=True,
        )

    def _to_part(self, record: PartRecord, enzyme: Optional[str]) -> GoldenGatePart:
        sites = record.t2s_sites
        if enzyme is not None:
            sites = [s for s in sites if s.enzyme.lower() == enzyme.lower()]
        left, right = self._extract_overhangs(sites)
        return GoldenGatePart(
            id=record.id,
            name=record.name,
            part_type=tables.PART_TYPE_VOCABULARY.get(_norm_type(record.part_type), "other"),
            level=record.level,
            left_overhang=left,
            right_overhang=right,
            sequence=record.sequence or None,
            compatible=left != right and len(left) == 4,
        )

    @staticmethod
    def _extract_overhangs(sites: Sequence[T2SSite]) -> Tuple[str, str]:
        if len(sites) < 2:
            return tables.SENTINEL_OVERHANG, tables.SENTINEL_OVERHANG
        ordered = sorted(sites, key=lambda s: s.position)
        return ordered[0].overhang_sequence, ordered[-1].overhang_sequence

    @staticmethod
    def _check_overhangs(parts: Sequence[GoldenGatePart]) -> Tuple[List[str], List[str]]:
        conflicts: List[str] = []
        warnings: List[str] = []

        counts: Counter = Counter()
        for p in parts:
            counts[p.left_overhang] += 1
            counts[p.right_overhang] += 1
        left_uses = Counter(p.left_overhang for p in parts)
        right_uses = Counter(p.right_overhang for p in parts)

        for oh, n in counts.items():
            if n > 2:
                conflicts.append(f"Overhang {oh} used {n} times - will cause assembly conflicts")
            elif n == 2 and (left_uses[oh] == 2 or right_uses[oh] == 2):
                conflicts.append(f"Overhang {oh} used twice on the same side")

        for oh in counts:
            if is_palindromic(oh):
                warnings.append(f"Overhang {oh} is palindromic - may reduce assembly efficiency")

        for a, b in tables.PROBLEMATIC_PAIRS:
            if counts[a] and counts[b]:
                warnings.append(f"Overhangs {a} and {b} may have reduced ligation efficiency")

        return conflicts, warnings

    @staticmethod
    def _assembly_order(parts: Sequence[GoldenGatePart]) -> List[str]:
        last = len(tables.TYPE_PRIORITY)
        ordered = sorted(parts, key=lambda p: tables.TYPE_PRIORITY.get(p.part_type, last))
        return [p.id for p in ordered]

    @staticmethod
    def _efficiency(parts: Sequence[GoldenGatePart], conflicts: List[str], warnings: List[str]) -> str:
        score = 100
        score -= 30 * len(conflicts)
        score -= 10 * len(warnings)
        score += 5 * sum(
            1
            for p in parts
            if p.left_overhang in tables.STANDARD_OVERHANGS or p.right_overhang in tables.STANDARD_OVERHANGS
        )
        if score >= 80:
            return "high"
        if score >= 50:
            return "medium"
        return "low"


_default_designer = GoldenGateDesigner()


def analyze_part_compatibility(parts: Sequence[PartRecord], enzyme: Optional[str] = None) -> GoldenGateStrategy:
    return _default_designer.analyze_part_compatibility(parts, enzyme=enzyme)


def generate_assembly_reaction(strategy: GoldenGateStrategy, enzyme: str = "BsaI") -> AssemblyReaction:
    return _default_designer.generate_assembly_reaction(strategy, enzyme)


def suggest_optimal_overhangs(part_types: Sequence[str], level: int = 0) -> Dict[str, Dict[str, str]]:
    return _default_designer.suggest_optimal_overhangs(part_types, level)
