from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .golden_gate import suggest_optimal_overhangs
from .io_sequence import extract_sequence, import_file
from .pipeline import run_pipeline
from .store import StorageError
from .type_iis import MOCLO_ENZYMES, enzyme_names, find_insert_regions, find_sites, get_enzyme, validate_overhangs
from .type_iis.dna import clean_iupac

logger = logging.getLogger(__name__)


def _read_sequence(args: argparse.Namespace) -> str:
    if args.sequence:
        return clean_iupac(args.sequence)
    imported = import_file(args.file)
    return extract_sequence(imported.content, imported.filename).sequence


def _enzymes(name: Optional[str]):
    if not name:
        return list(MOCLO_ENZYMES)
    enzyme = get_enzyme(name)
    if enzyme is None:
        raise ValueError(f"Unknown enzyme: {name} (known: {', '.join(enzyme_names())})")
    return [enzyme]


def _cmd_run(args: argparse.Namespace) -> int:
    strategy, reaction = run_pipeline(args.config, args.outdir)
    print(f"level={strategy.level}\tefficiency={strategy.efficiency}\tproduct_size={reaction.expected_product.size}")
    print("order\t" + ",".join(strategy.assembly_order))
    for c in strategy.conflicts:
        print(f"conflict\t{c}")
    for w in strategy.warnings:
        print(f"warning\t{w}")
    return 0


def _cmd_sites(args: argparse.Namespace) -> int:
    seq = _read_sequence(args)
    print("enzyme\tposition\tstrand\tcut_top\tcut_bottom\toverhang\ttype")
    for enzyme in _enzymes(args.enzyme):
        for s in find_sites(seq, enzyme):
            print(
                f"{s.enzyme}\t{s.position}\t{s.strand}\t{s.cut_position_top}\t"
                f"{s.cut_position_bottom}\t{s.overhang_sequence}\t{s.overhang_type}"
            )
    return 0


def _cmd_inserts(args: argparse.Namespace) -> int:
    seq = _read_sequence(args)
    enzyme = _enzymes(args.enzyme)[0]
    print("start\tend\tleft\tright")
    for c in find_insert_regions(seq, enzyme):
        print(f"{c.start}\t{c.end}\t{c.left_overhang}\t{c.right_overhang}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    res = validate_overhangs([oh.upper() for oh in args.overhangs])
    for c in res.conflicts:
        print(f"conflict\t{c}")
    for w in res.warnings:
        print(f"warning\t{w}")
    print("valid" if res.valid else "invalid")
    return 0 if res.valid else 1


def _cmd_suggest(args: argparse.Namespace) -> int:
    for part_type, oh in suggest_optimal_overhangs(args.part_types, args.level).items():
        print(f"{part_type}\t{oh['left']}\t{oh['right']}")
    return 0


def _add_sequence_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--sequence", help="DNA sequence string.")
    group.add_argument("--file", help="FASTA, GenBank or plain-text sequence file.")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mocloplan", description="mocloplan - Type IIS site analysis and MoClo Golden Gate planning.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    run = sub.add_parser("run", help="Analyse configured parts and design a Golden Gate strategy.")
    run.add_argument("config", help="Path to YAML config.")
    run.add_argument("--outdir", default="out", help="Output directory.")

    sites = sub.add_parser("sites", help="List Type IIS sites in a sequence.")
    _add_sequence_args(sites)
    sites.add_argument("--enzyme", default=None, help="Restrict to one catalog enzyme.")

    inserts = sub.add_parser("inserts", help="List insert regions between consecutive sites.")
    _add_sequence_args(inserts)
    inserts.add_argument("--enzyme", default="BsaI", help="Catalog enzyme (default: BsaI).")

    validate = sub.add_parser("validate", help="Check overhangs for duplicates, palindromes and GC extremes.")
    validate.add_argument("overhangs", nargs="+")

    suggest = sub.add_parser("suggest", help="Show standard MoClo overhangs for a level.")
    suggest.add_argument("part_types", nargs="*")
    suggest.add_argument("--level", type=int, default=0)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    dispatch = {
        "run": _cmd_run,
        "sites": _cmd_sites,
        "inserts": _cmd_inserts,
        "validate": _cmd_validate,
        "suggest": _cmd_suggest,
    }
    try:
        return dispatch[args.cmd](args)
    except (ValueError, StorageError, OSError) as exc:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
