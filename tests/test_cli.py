import yaml

from mocloplan.cli import main


def test_sites(capsys):
    assert main(["sites", "--sequence", "GGTCTCAGGTCTC", "--enzyme", "BsaI"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1].startswith("BsaI\t0\t+\t1\t5\tGTCT")
    assert lines[2].startswith("BsaI\t7\t+")


def test_sites_from_file(tmp_path, capsys):
    path = tmp_path / "p.fasta"
    path.write_text(">p\nAAAAGAGACCAAAA\n")
    assert main(["sites", "--file", str(path), "--enzyme", "bsai"]) == 0
    assert "BsaI\t4\t-\t5\t9\tGTCT" in capsys.readouterr().out


def test_unknown_enzyme(capsys):
    assert main(["sites", "--sequence", "ACGT", "--enzyme", "NopeI"]) == 1
    assert "Unknown enzyme" in capsys.readouterr().err


def test_inserts(capsys):
    assert main(["inserts", "--sequence", "GGTCTC" + "A" * 10 + "GGTCTC"]) == 0
    assert capsys.readouterr().out.splitlines()[1] == "5\t17\tGTCT\tGTCT"


def test_validate_exit_code(capsys):
    assert main(["validate", "aatt", "AATT"]) == 1
    out = capsys.readouterr().out
    assert "conflict\tDuplicate overhang: AATT" in out
    assert out.rstrip().endswith("invalid")
    assert main(["validate", "ATGC", "GGAG"]) == 0


def test_suggest(capsys):
    assert main(["suggest", "--level", "1"]) == 0
    assert "transcription_unit\tGCCA\tCCGA" in capsys.readouterr().out


def test_run(tmp_path, capsys):
    cfg = {"inputs": {"parts": [{"name": "p", "type": "promoter", "sequence": "GGTCTCAAAAAAAAAAGAGACC"}]}}
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg))
    assert main(["run", str(path), "--outdir", str(tmp_path / "out")]) == 0
    assert capsys.readouterr().out.startswith("level=0\tefficiency=")
    assert (tmp_path / "out" / "strategy.yaml").exists()


def test_missing_config(tmp_path, capsys):
    assert main(["run", str(tmp_path / "missing.yaml")]) == 1
    assert capsys.readouterr().err.startswith("Error:")
