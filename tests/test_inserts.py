from mocloplan.type_iis import analyze_sequence, extract_inserts, find_insert_regions, get_enzyme

SEQ = "GGTCTC" + "A" * 10 + "GGTCTC"


def test_candidate_overhangs_come_from_bounding_sites():
    c = find_insert_regions(SEQ, get_enzyme("BsaI"))[0]
    assert c.left_overhang == "GTCT"
    assert c.right_overhang == "GTCT"


def test_single_site_has_no_insert():
    assert find_insert_regions("GGTCTCAAAA", get_enzyme("BsaI")) == []


def test_only_adjacent_pairs_are_used():
    seq = "GGTCTC" + "A" * 4 + "GGTCTC" + "A" * 4 + "GGTCTC"
    cands = find_insert_regions(seq, get_enzyme("BsaI"))
    assert [(c.start, c.end) for c in cands] == [(5, 11), (15, 21)]


def test_extract_inserts_materializes_sequence():
    inserts = extract_inserts(SEQ, get_enzyme("BsaI"), moclo_level=1, part_type="nonsense")
    assert len(inserts) == 1
    ins = inserts[0]
    assert ins.id == "insert_BsaI_1"
    assert ins.sequence == "C" + "A" * 10 + "G"
    assert ins.moclo_level == 1
    assert ins.part_type == "other"


def test_analyze_sequence_bundles_everything():
    analysis = analyze_sequence(SEQ)
    assert analysis.schema_version == 1
    assert analysis.insert_enzyme == "BsaI"
    assert len(analysis.sites["BsaI"]) == 2
    assert len(analysis.inserts) == 1
    # both BsaI overhangs are GTCT
    assert analysis.validation.conflicts == ["Duplicate overhang: GTCT"]
    d = analysis.to_dict()
    assert d["sites"]["BsaI"][0]["overhang_sequence"] == "GTCT"


def test_analyze_sequence_unknown_insert_enzyme():
    analysis = analyze_sequence(SEQ, insert_enzyme="NotAnEnzyme")
    assert analysis.inserts == []
    assert len(analysis.all_sites()) == 2
