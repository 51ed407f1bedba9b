from datetime import datetime, timezone

import pytest

from mocloplan.records import Folder, PartRecord
from mocloplan.store import RecordStore, StorageError
from mocloplan.type_iis import extract_inserts, find_sites, get_enzyme

SEQ = "GGTCTC" + "A" * 10 + "GGTCTC"


def _record(rid, name, day=1, **kw):
    return PartRecord(id=rid, name=name, added_at=datetime(2024, 1, day, tzinfo=timezone.utc), **kw)


def test_persistence_round_trip(tmp_path):
    path = str(tmp_path / "library.yaml")
    bsai = get_enzyme("BsaI")
    rec = _record(
        "p1", "pTest", sequence=SEQ, part_type="promoter",
        t2s_sites=find_sites(SEQ, bsai), inserts=extract_inserts(SEQ, bsai),
    )
    RecordStore(path).upsert(rec)

    loaded = RecordStore(path).get_by_id("p1")
    assert loaded is not None
    assert loaded.folder_id == "default"
    assert loaded.t2s_sites == rec.t2s_sites
    assert loaded.inserts == rec.inserts
    assert loaded.added_at == rec.added_at


def test_newest_first_and_search():
    store = RecordStore()
    store.upsert(_record("a", "Alpha", day=1, description="strong promoter"))
    store.upsert(_record("b", "Beta", day=3, part_type="cds"))
    store.upsert(_record("c", "Gamma", day=2))
    assert [r.id for r in store.get_all()] == ["b", "c", "a"]
    assert [r.id for r in store.search("PROMOTER")] == ["a"]
    assert [r.id for r in store.search("cds")] == ["b"]
    assert store.exists("Gamma")
    assert store.get_by_name("Delta") is None


def test_delete_many():
    store = RecordStore()
    store.upsert(_record("a", "A"))
    store.upsert(_record("b", "B"))
    summary = store.delete_many(["a", "missing", "b"])
    assert (summary.success, summary.failed) == (2, 1)
    assert store.get_all() == []


def test_default_folders():
    ids = {f.id for f in RecordStore().list_folders()}
    assert ids == {"default", "vectors", "parts", "assemblies"}


def test_folder_lifecycle():
    store = RecordStore()
    assert store.create_folder(Folder(id="mine", name="Mine")) is True
    assert store.create_folder(Folder(id="other", name="Mine")) is False
    assert store.update_folder("mine", name="Vectors") is False
    assert store.update_folder("mine", description="my parts", color="#ff0000") is True
    assert store.update_folder("nope", name="x") is False

    store.upsert(_record("a", "A", folder_id="mine"))
    store.upsert(_record("b", "B"))
    assert [r.id for r in store.list_by_folder("mine")] == ["a"]

    assert store.move_records(["b", "missing"], "mine") is False
    assert {r.id for r in store.list_by_folder("mine")} == {"a", "b"}

    assert store.delete_folder("mine") is True
    assert {r.id for r in store.list_by_folder("default")} == {"a", "b"}
    assert store.delete_folder("default") is False


def test_malformed_document(tmp_path):
    path = tmp_path / "library.yaml"
    path.write_text("[1, 2]\n")
    with pytest.raises(StorageError):
        RecordStore(str(path))


def test_failed_save_leaves_state_unchanged(tmp_path):
    store = RecordStore(str(tmp_path / "library.yaml"))
    store.upsert(_record("a", "A", folder_id="parts"))
    store.path = str(tmp_path / "missing" / "library.yaml")

    with pytest.raises(StorageError):
        store.upsert(_record("b", "B"))
    assert store.get_by_id("b") is None

    with pytest.raises(StorageError):
        store.delete_folder("parts")
    assert {f.id for f in store.list_folders()} == {"default", "vectors", "parts", "assemblies"}
    assert store.get_by_id("a").folder_id == "parts"

    with pytest.raises(StorageError):
        store.update_folder("parts", name="Renamed")
    assert "Renamed" not in {f.name for f in store.list_folders()}

    with pytest.raises(StorageError):
        store.delete("a")
    assert store.get_by_id("a") is not None


def test_naive_timestamps_are_read_as_utc(tmp_path):
    path = tmp_path / "library.yaml"
    path.write_text(
        "records:\n"
        "- {id: old, name: Old, added_at: '2024-01-01T00:00:00'}\n"
        "- {id: new, name: New, added_at: '2024-02-01T00:00:00+00:00'}\n"
    )
    store = RecordStore(str(path))
    assert store.get_by_id("old").added_at.tzinfo is not None
    assert [r.id for r in store.get_all()] == ["new", "old"]
