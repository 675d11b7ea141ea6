"""Tests for persistence and storage modules."""
import json
import logging

import pytest

from clicksim.config import STORAGE_KEY
from clicksim.persistence import PersistenceManager, Snapshot, load, save
from clicksim.state import SimulationState, UpgradeProgress
from clicksim.storage import BlobStore, FileStore, MemoryStore, StorageError


def _make_state() -> SimulationState:
    return SimulationState(
        resources=1234.5,
        total_actions=987.25,
        manual_power=9,
        automation_rate=12.5,
        upgrades={
            "finger-training": UpgradeProgress(3, 23),
            "macro-rig": UpgradeProgress(5, 187),
        },
        achieved_milestones={"first-click", "hundred-clicks"},
        tick_interval_ms=820,
    )


class _BrokenStore(BlobStore):
    def get(self, key):
        raise StorageError("disk on fire")

    def set(self, key, value):
        raise StorageError("disk on fire")

    def remove(self, key):
        raise StorageError("disk on fire")


# ── Serialization ───────────────────────────────────────────────────


class TestSave:
    def test_key_set(self):
        raw = json.loads(save(_make_state()))
        assert set(raw) == {
            "resources",
            "totalActions",
            "manualPower",
            "automationRate",
            "upgrades",
            "milestones",
            "tickIntervalMs",
            "schemaVersion",
        }

    def test_field_values(self):
        raw = json.loads(save(_make_state()))
        assert raw["schemaVersion"] == 1
        assert raw["tickIntervalMs"] == 820
        assert raw["upgrades"]["macro-rig"] == {"level": 5, "cost": 187}
        assert raw["milestones"] == {"first-click": True, "hundred-clicks": True}

    def test_round_trip(self):
        state = _make_state()
        assert load(save(state)) == state

    def test_fresh_round_trip(self):
        assert load(save(SimulationState.fresh())) == SimulationState.fresh()


class TestLoad:
    def test_absent(self):
        assert load(None) is None
        assert load("") is None

    def test_not_json(self, caplog):
        with caplog.at_level(logging.WARNING, logger="clicksim.persistence"):
            assert load("{not json") is None
        assert "unreadable" in caplog.text

    def test_not_an_object(self):
        assert load("[1, 2, 3]") is None

    def test_other_version(self, caplog):
        raw = json.loads(save(_make_state()))
        raw["schemaVersion"] = 2
        with caplog.at_level(logging.WARNING, logger="clicksim.persistence"):
            assert load(json.dumps(raw)) is None
        assert "schemaVersion" in caplog.text

    @pytest.mark.parametrize("version", [None, "1", True, 1.5])
    def test_bad_version_types(self, version):
        raw = json.loads(save(_make_state()))
        raw["schemaVersion"] = version
        assert load(json.dumps(raw)) is None

    def test_missing_version(self):
        raw = json.loads(save(_make_state()))
        del raw["schemaVersion"]
        assert load(json.dumps(raw)) is None

    @pytest.mark.parametrize(
        "field, value",
        [
            ("resources", -1),
            ("resources", "lots"),
            ("totalActions", None),
            ("tickIntervalMs", 100),
            ("tickIntervalMs", 5000),
            ("upgrades", {"finger-training": {"level": -1, "cost": 15}}),
            ("upgrades", {"finger-training": {"level": 1}}),
            ("milestones", ["first-click"]),
        ],
    )
    def test_malformed_fields(self, field, value):
        raw = json.loads(save(_make_state()))
        raw[field] = value
        assert load(json.dumps(raw)) is None

    def test_false_milestone_not_achieved(self):
        raw = json.loads(save(_make_state()))
        raw["milestones"]["thousand-clicks"] = False
        state = load(json.dumps(raw))
        assert state is not None
        assert state.achieved_milestones == {"first-click", "hundred-clicks"}
        assert state.resources == 1234.5

    def test_missing_field(self):
        raw = json.loads(save(_make_state()))
        del raw["manualPower"]
        assert load(json.dumps(raw)) is None

    def test_unknown_keys_ignored(self):
        raw = json.loads(save(_make_state()))
        raw["somethingElse"] = 42
        assert load(json.dumps(raw)) == _make_state()

    def test_unknown_upgrade_ids_kept(self):
        raw = json.loads(save(_make_state()))
        raw["upgrades"]["retired-gadget"] = {"level": 2, "cost": 99}
        state = load(json.dumps(raw))
        assert state.upgrades["retired-gadget"] == UpgradeProgress(2, 99)

    def test_snapshot_accepts_field_names(self):
        snap = Snapshot.from_state(_make_state())
        assert snap.to_state() == _make_state()
        dumped = snap.model_dump(by_alias=True)
        assert dumped["manualPower"] == 9


# ── Stores ──────────────────────────────────────────────────────────


class TestMemoryStore:
    def test_get_set_remove(self):
        store = MemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.remove("k")
        assert store.get("k") is None
        store.remove("k")

    def test_initial(self):
        assert MemoryStore({"a": "b"}).get("a") == "b"


class TestFileStore:
    def test_missing_key(self, tmp_path):
        assert FileStore(tmp_path).get("nothing") is None

    def test_set_creates_directory(self, tmp_path):
        store = FileStore(tmp_path / "nested" / "saves")
        store.set("slot", "hello")
        assert store.get("slot") == "hello"
        assert store.path_for("slot").read_text(encoding="utf-8") == "hello"

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        store = FileStore(tmp_path)
        store.set("slot", "one")
        store.set("slot", "two")
        assert store.get("slot") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["slot.json"]

    def test_key_sanitized(self, tmp_path):
        path = FileStore(tmp_path).path_for("../evil/key")
        assert path.parent == tmp_path
        assert path.name == ".._evil_key.json"

    def test_remove(self, tmp_path):
        store = FileStore(tmp_path)
        store.set("slot", "x")
        store.remove("slot")
        assert store.get("slot") is None
        store.remove("slot")

    def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError):
            FileStore(blocker).set("slot", "x")

    def test_failed_write_removes_temp_file(self, tmp_path, monkeypatch):
        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("clicksim.storage.os.replace", fail_replace)
        store = FileStore(tmp_path)
        with pytest.raises(StorageError, match="disk full"):
            store.set("slot", "x")
        assert list(tmp_path.iterdir()) == []


# ── Manager ─────────────────────────────────────────────────────────


class TestPersistenceManager:
    def test_persist_and_restore(self):
        store = MemoryStore()
        manager = PersistenceManager(store)
        assert manager.persist(_make_state())
        assert STORAGE_KEY in store.blobs
        assert manager.restore() == _make_state()

    def test_custom_key(self):
        store = MemoryStore()
        PersistenceManager(store, key="other").persist(SimulationState.fresh())
        assert list(store.blobs) == ["other"]

    def test_clear(self):
        store = MemoryStore()
        manager = PersistenceManager(store)
        manager.persist(_make_state())
        manager.clear()
        assert store.blobs == {}
        assert manager.restore() is None

    def test_no_store(self):
        manager = PersistenceManager(None)
        assert manager.persist(_make_state()) is False
        assert manager.restore() is None
        manager.clear()

    def test_failures_are_logged_not_raised(self, caplog):
        manager = PersistenceManager(_BrokenStore())
        with caplog.at_level(logging.WARNING, logger="clicksim.persistence"):
            assert manager.persist(_make_state()) is False
            assert manager.restore() is None
            manager.clear()
        assert caplog.text.count("disk on fire") == 3

    def test_file_backed(self, tmp_path):
        manager = PersistenceManager(FileStore(tmp_path))
        manager.persist(_make_state())
        assert (tmp_path / f"{STORAGE_KEY}.json").exists()
        assert PersistenceManager(FileStore(tmp_path)).restore() == _make_state()
