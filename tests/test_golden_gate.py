from mocloplan.golden_gate import (
    GoldenGateDesigner,
    analyze_part_compatibility,
    generate_assembly_reaction,
    suggest_optimal_overhangs,
)
from mocloplan.records import PartRecord
from mocloplan.type_iis import T2SSite


def _site(pos, overhang, enzyme="BsaI"):
    return T2SSite(
        enzyme=enzyme,
        position=pos,
        strand="+",
        recognition_site="GGTCTC",
        cut_position_top=pos + 1,
        cut_position_bottom=pos + 1 + len(overhang),
        overhang_sequence=overhang,
        overhang_type="5prime",
    )


def _part(pid, part_type, left=None, right=None, **kw):
    sites = [] if left is None else [_site(0, left), _site(100, right)]
    return PartRecord(id=pid, name=kw.pop("name", pid), part_type=part_type, t2s_sites=sites, **kw)


def test_level_inference():
    assert analyze_part_compatibility([_part("p", "promoter"), _part("c", "cds")]).level == 0
    assert analyze_part_compatibility([_part("t", "transcription_unit"), _part("p", "promoter")]).level == 1
    assert analyze_part_compatibility([_part("o", "other")]).level == 2
    assert analyze_part_compatibility([_part("p", "Promoter")]).level == 0


def test_type_vocabulary():
    strategy = analyze_part_compatibility(
        [_part("a", "coding_sequence"), _part("b", "vector"), _part("c", "weird")]
    )
    assert [p.part_type for p in strategy.parts] == ["cds", "backbone", "other"]


def test_overhangs_from_first_and_last_site():
    rec = PartRecord(
        id="p", name="p", part_type="promoter",
        t2s_sites=[_site(100, "TACT"), _site(40, "CCCC"), _site(0, "GGAG")],
    )
    part = analyze_part_compatibility([rec]).parts[0]
    assert (part.left_overhang, part.right_overhang) == ("GGAG", "TACT")
    assert part.compatible is True


def test_too_few_sites_gives_sentinel():
    rec = PartRecord(id="p", name="p", part_type="cds", t2s_sites=[_site(0, "AATG")])
    strategy = analyze_part_compatibility([rec])
    part = strategy.parts[0]
    assert (part.left_overhang, part.right_overhang) == ("NNNN", "NNNN")
    assert part.compatible is False
    assert strategy.conflicts == []
    assert strategy.warnings == ["Overhang NNNN is palindromic - may reduce assembly efficiency"]


def test_compatibility_requires_distinct_four_base_overhangs():
    parts = analyze_part_compatibility([_part("a", "cds", "AATG", "AATG"), _part("b", "cds", "CTC", "GTA")]).parts
    assert [p.compatible for p in parts] == [False, False]


def test_backbone_detection():
    parts = [_part("p", "promoter", "GGAG", "TACT"), _part("r", "other", "CGCT", "GGAG", resistance="KanR")]
    assert analyze_part_compatibility(parts).backbone.id == "r"

    parts = [_part("p", "promoter"), _part("v", "other", name="my Vector")]
    assert analyze_part_compatibility(parts).backbone.id == "v"

    parts = [_part("p", "promoter")]
    assert analyze_part_compatibility(parts).backbone.id == "default_backbone"


def test_assembly_order_and_positions():
    parts = [
        _part("t", "terminator"),
        _part("c1", "cds"),
        _part("o", "other"),
        _part("p", "promoter"),
        _part("c2", "cds"),
        _part("b", "backbone"),
    ]
    strategy = analyze_part_compatibility(parts)
    assert strategy.assembly_order == ["b", "p", "c1", "c2", "t", "o"]
    positions = {p.id: p.position for p in strategy.parts}
    assert positions == {"b": 0, "p": 1, "c1": 2, "c2": 3, "t": 4, "o": 5}
    # parts keep their input order
    assert [p.id for p in strategy.parts] == ["t", "c1", "o", "p", "c2", "b"]


def test_standard_level0_set_is_clean():
    strategy = analyze_part_compatibility(
        [
            _part("p", "promoter", "GGAG", "TACT"),
            _part("c", "cds", "AATG", "GCTT"),
            _part("t", "terminator", "GCTT", "CGCT"),
        ]
    )
    assert strategy.conflicts == []
    assert strategy.warnings == []
    assert strategy.efficiency == "high"


def test_problematic_pair_warning():
    strategy = analyze_part_compatibility([_part("a", "cds", "AAAA", "TTTT")])
    assert strategy.warnings == ["Overhangs AAAA and TTTT may have reduced ligation efficiency"]


def test_medium_efficiency():
    strategy = analyze_part_compatibility(
        [_part("a", "promoter", "TTAC", "GATC"), _part("b", "cds", "TTAC", "CCAA")]
    )
    assert strategy.conflicts == ["Overhang TTAC used twice on the same side"]
    assert len(strategy.warnings) == 1
    assert strategy.efficiency == "medium"


def test_shared_junction_is_not_a_conflict():
    strategy = analyze_part_compatibility(
        [_part("a", "promoter", "TTAC", "CCAA"), _part("b", "cds", "CCAA", "GGTA")]
    )
    assert strategy.conflicts == []


def test_enzyme_filter():
    rec = PartRecord(
        id="p", name="p", part_type="promoter",
        t2s_sites=[_site(0, "GGAG"), _site(50, "TACT"), _site(90, "CCCC", enzyme="BbsI")],
    )
    assert analyze_part_compatibility([rec]).parts[0].right_overhang == "CCCC"
    assert analyze_part_compatibility([rec], enzyme="BsaI").parts[0].right_overhang == "TACT"


def test_generate_assembly_reaction():
    parts = [
        _part("p", "promoter", "GGAG", "TACT", sequence="A" * 30),
        _part("c", "cds", "TACT", "GCTT", sequence="C" * 45),
        _part("x", "other", "GCTT", "CGCT"),
    ]
    strategy = analyze_part_compatibility(parts)
    reaction = generate_assembly_reaction(strategy)
    assert reaction.enzyme == "BsaI"
    assert reaction.expected_product.size == 75
    assert reaction.expected_product.overhangs == ["GGAG", "TACT", "GCTT", "CGCT"]
    assert reaction.expected_product.circularized is True
    assert reaction.efficiency == 0.9
    assert reaction.warnings == strategy.warnings
    assert generate_assembly_reaction(strategy, enzyme="BsmBI").enzyme == "BsmBI"


def test_reaction_efficiency_mapping():
    low = analyze_part_compatibility(
        [_part(pid, "cds", "TTAC", "GGAA") for pid in ("a", "b", "c")]
    )
    assert low.efficiency == "low"
    assert generate_assembly_reaction(low).efficiency == 0.4


def test_suggest_optimal_overhangs():
    level0 = suggest_optimal_overhangs(["promoter"], 0)
    assert set(level0) == {"promoter", "cds", "terminator", "backbone"}
    assert level0["promoter"] == {"left": "GGAG", "right": "TACT"}
    level1 = suggest_optimal_overhangs([], 1)
    assert level1["transcription_unit"] == {"left": "GCCA", "right": "CCGA"}
    assert level1["backbone"] == {"left": "TCCG", "right": "GCCA"}
    assert suggest_optimal_overhangs(["cds"], 5) == {}


def test_strategy_to_dict():
    d = GoldenGateDesigner().analyze_part_compatibility([_part("p", "promoter", "GGAG", "TACT")]).to_dict()
    assert d["parts"][0]["left_overhang"] == "GGAG"
    assert d["backbone"]["id"] == "default_backbone"
