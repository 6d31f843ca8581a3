"""Tests for baseline snapshot persistence."""

import json
from datetime import date

import pytest

from outage_map.errors import PersistError
from outage_map.schemas.outage import Baseline, LatLng
from outage_map.services.snapshot_store import SnapshotStore, format_reset_date, parse_reset_date


def _baseline() -> Baseline:
    return Baseline(
        outages={
            "A": [LatLng(lat=47.61, lng=-122.33), LatLng(lat=47.62, lng=-122.34)],
            42: [],
        },
        reset_date=date(2026, 3, 7),
    )


def test_format_reset_date_matches_en_us_locale():
    assert format_reset_date(date(2026, 3, 7)) == "3/7/2026"
    assert format_reset_date(date(2026, 12, 25)) == "12/25/2026"


def test_parse_reset_date():
    assert parse_reset_date("3/7/2026") == date(2026, 3, 7)
    assert parse_reset_date("12/25/2026") == date(2026, 12, 25)


def test_save_then_load(tmp_path):
    store = SnapshotStore(tmp_path / "state.json")
    store.save(_baseline())

    loaded = store.load()
    assert loaded == _baseline()
    assert 42 in loaded.outages
    assert "A" in loaded.outages


def test_file_format(tmp_path):
    path = tmp_path / "state.json"
    SnapshotStore(path).save(_baseline())

    doc = json.loads(path.read_text())
    assert doc["lastResetDate"] == "3/7/2026"
    assert doc["initialOutages"] == [
        ["A", [{"lat": 47.61, "lng": -122.33}, {"lat": 47.62, "lng": -122.34}]],
        [42, []],
    ]


def test_save_overwrites_previous(tmp_path):
    store = SnapshotStore(tmp_path / "state.json")
    store.save(_baseline())
    store.save(Baseline(outages={"B": []}, reset_date=date(2026, 3, 8)))

    loaded = store.load()
    assert set(loaded.outages) == {"B"}
    assert loaded.reset_date == date(2026, 3, 8)


def test_load_missing_file(tmp_path):
    assert SnapshotStore(tmp_path / "nope.json").load() is None


def test_load_corrupt_json(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json")
    assert SnapshotStore(path).load() is None


def test_load_bad_date(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"initialOutages": [], "lastResetDate": "yesterday"}))
    assert SnapshotStore(path).load() is None


def test_load_out_of_range_coordinate(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({
        "initialOutages": [["A", [{"lat": 123.0, "lng": 0.0}]]],
        "lastResetDate": "3/7/2026",
    }))
    assert SnapshotStore(path).load() is None


def test_save_unwritable_raises_persist_error(tmp_path):
    store = SnapshotStore(tmp_path / "missing-dir" / "state.json")
    with pytest.raises(PersistError):
        store.save(_baseline())


def test_save_unserializable_id_raises_persist_error(tmp_path):
    store = SnapshotStore(tmp_path / "state.json")
    with pytest.raises(PersistError):
        store.save(Baseline(outages={1.5: []}, reset_date=date(2026, 3, 7)))
    assert not (tmp_path / "state.json").exists()
