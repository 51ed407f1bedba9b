from __future__ import annotations
import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .golden_gate import AssemblyReaction, GoldenGateDesigner, GoldenGateStrategy
from .io_sequence import extract_sequence, import_file, write_fasta
from .parts_table_xlsx import load_parts_table_xlsx
from .records import PartRecord
from .store import RecordStore
from .type_iis import analyze_sequence, extract_inserts, get_enzyme
from .type_iis.dna import clean_iupac

logger = logging.getLogger(__name__)

_INSERT_TYPES = {"promoter": "promoter", "cds": "cds", "terminator": "terminator",
                 "backbone": "vector", "vector": "vector", "connector": "linker"}


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError("Config must be a YAML mapping.")
    return cfg


def _resolve(workdir: str, path: str) -> str:
    return path if os.path.isabs(path) else os.path.join(workdir, path)


def _slug(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_") or "part"


def _part_id(entry: Dict[str, Any]) -> str:
    return str(entry.get("id") or _slug(str(entry.get("name") or "")))


def _collect_part_entries(cfg: Dict[str, Any], workdir: str) -> List[Dict[str, Any]]:
    inputs = cfg.get("inputs", {}) or {}
    entries: List[Dict[str, Any]] = [dict(p) for p in (inputs.get("parts", []) or [])]

    table = inputs.get("parts_table")
    if table:
        for row in load_parts_table_xlsx(_resolve(workdir, str(table)), inputs.get("parts_table_sheet")):
            entries.append(
                {
                    "id": row.id,
                    "name": row.name,
                    "type": row.part_type,
                    "level": row.level,
                    "sequence": row.sequence,
                    "file": row.file,
                    "resistance": row.resistance,
                    "origin": row.origin,
                    "description": row.description,
                }
            )

    if not entries:
        raise ValueError("inputs.parts or inputs.parts_table must list at least one part.")

    seen = set()
    for entry in entries:
        part_id = _part_id(entry)
        if part_id in seen:
            raise ValueError(f"Duplicate part id '{part_id}'; give each part a unique name or id.")
        seen.add(part_id)
    return entries


def _load_sequence(entry: Dict[str, Any], workdir: str) -> Tuple[str, Optional[str]]:
    if entry.get("sequence"):
        return clean_iupac(str(entry["sequence"])), None
    if entry.get("file"):
        imported = import_file(_resolve(workdir, str(entry["file"])))
        found = extract_sequence(imported.content, imported.filename)
        return found.sequence, found.description
    raise ValueError(f"Part '{entry.get('name')}' needs either 'sequence' or 'file'.")


def build_part_record(entry: Dict[str, Any], workdir: str, enzyme_name: str) -> PartRecord:
    """Import one configured part and attach its catalog-wide analysis."""
    name = str(entry.get("name") or entry.get("id") or "")
    if not name:
        raise ValueError("Every part needs a 'name'.")
    sequence, description = _load_sequence(entry, workdir)
    if not sequence:
        logger.warning("Part %s has no usable sequence", name)

    part_type = str(entry.get("type") or entry.get("part_type") or "unknown").lower()
    level = int(entry.get("level") or 0)
    analysis = analyze_sequence(sequence, insert_enzyme=enzyme_name)
    sites = analysis.all_sites()
    inserts = extract_inserts(
        sequence,
        get_enzyme(enzyme_name),
        moclo_level=level,
        part_type=_INSERT_TYPES.get(part_type, "other"),
        id_prefix=_slug(name),
    )
    return PartRecord(
        id=_part_id(entry),
        name=name,
        sequence=sequence,
        description=entry.get("description") or description,
        t2s_sites=sites,
        inserts=inserts,
        moclo_compatible=bool(sites),
        level=level,
        part_type=part_type,
        resistance=entry.get("resistance") or None,
        origin=entry.get("origin") or None,
        folder_id=entry.get("folder") or None,
    )


def write_tsv(path: str, rows: List[Dict[str, str]], header: List[str]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write("\t".join(header) + "\n")
        for r in rows:
            f.write("\t".join(r.get(h, "") for h in header) + "\n")


def run_pipeline(config_path: str, outdir: str) -> Tuple[GoldenGateStrategy, AssemblyReaction]:
    cfg = load_config(config_path)
    os.makedirs(outdir, exist_ok=True)
    workdir = os.path.dirname(os.path.abspath(config_path)) or "."

    enzyme = get_enzyme(str(cfg.get("enzyme", "BsaI")))
    if enzyme is None:
        raise ValueError(f"Unknown assembly enzyme: {cfg.get('enzyme')}")

    records = [build_part_record(entry, workdir, enzyme.name) for entry in _collect_part_entries(cfg, workdir)]
    logger.info("Analysed %d part(s) for %s assembly", len(records), enzyme.name)

    store_path = (cfg.get("store", {}) or {}).get("path")
    if store_path:
        store = RecordStore(_resolve(workdir, str(store_path)))
        for rec in records:
            store.upsert(rec)

    designer = GoldenGateDesigner()
    strategy = designer.analyze_part_compatibility(records, enzyme=enzyme.name)
    reaction = designer.generate_assembly_reaction(strategy, enzyme.name)

    outputs = cfg.get("outputs", {}) or {}
    sites_tsv = os.path.join(outdir, outputs.get("sites_tsv", "sites.tsv"))
    inserts_fasta = os.path.join(outdir, outputs.get("inserts_fasta", "inserts.fasta"))
    report_tsv = os.path.join(outdir, outputs.get("parts_report_tsv", "parts_report.tsv"))
    strategy_yaml = os.path.join(outdir, outputs.get("strategy_yaml", "strategy.yaml"))

    site_rows: List[Dict[str, str]] = []
    for rec in records:
        for s in rec.t2s_sites:
            site_rows.append(
                {
                    "part_id": rec.id,
                    "enzyme": s.enzyme,
                    "position": str(s.position),
                    "strand": s.strand,
                    "recognition_site": s.recognition_site,
                    "cut_top": str(s.cut_position_top),
                    "cut_bottom": str(s.cut_position_bottom),
                    "overhang": s.overhang_sequence,
                    "overhang_type": s.overhang_type,
                }
            )
    write_tsv(
        sites_tsv,
        site_rows,
        header=["part_id", "enzyme", "position", "strand", "recognition_site",
                "cut_top", "cut_bottom", "overhang", "overhang_type"],
    )

    write_fasta(
        inserts_fasta,
        [(f"{rec.id}|{ins.id}|{ins.left_overhang}-{ins.right_overhang}", ins.sequence)
         for rec in records for ins in rec.inserts],
    )

    parts_by_id = {p.id: p for p in strategy.parts}
    report_rows: List[Dict[str, str]] = []
    for rec in records:
        part = parts_by_id[rec.id]
        report_rows.append(
            {
                "part_id": rec.id,
                "name": rec.name,
                "part_type": part.part_type,
                "size": str(rec.size),
                "n_sites": str(len(rec.t2s_sites)),
                "n_inserts": str(len(rec.inserts)),
                "left_overhang": part.left_overhang,
                "right_overhang": part.right_overhang,
                "compatible": str(part.compatible),
                "position": "" if part.position is None else str(part.position),
            }
        )
    write_tsv(
        report_tsv,
        report_rows,
        header=["part_id", "name", "part_type", "size", "n_sites", "n_inserts",
                "left_overhang", "right_overhang", "compatible", "position"],
    )

    with open(strategy_yaml, "w", encoding="utf-8") as f:
        yaml.safe_dump({"strategy": strategy.to_dict(), "reaction": reaction.to_dict()}, f, sort_keys=False)

    return strategy, reaction
