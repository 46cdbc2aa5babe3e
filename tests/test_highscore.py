"""High score persistence is best-effort and never breaks gameplay."""
import json

import pytest

from game.defense.highscore import HighScoreBook, JsonFileStore, KeyValueStore, MemoryStore


class BrokenStore(KeyValueStore):
    def get(self, key):
        raise OSError("disk on fire")

    def set(self, key, value):
        raise OSError("read-only filesystem")


def test_missing_value_loads_as_zero() -> None:
    assert HighScoreBook(MemoryStore()).load() == 0


def test_garbage_value_loads_as_zero() -> None:
    assert HighScoreBook(MemoryStore({"soo_nova_high_score": "lots"})).load() == 0


def test_unreadable_store_loads_as_zero() -> None:
    assert HighScoreBook(BrokenStore()).load() == 0


def test_record_only_when_beaten() -> None:
    store = MemoryStore({"soo_nova_high_score": "650"})
    book = HighScoreBook(store)
    assert book.record(600, 650) == 650
    assert store.data["soo_nova_high_score"] == "650"
    assert book.record(700, 650) == 700
    assert store.data["soo_nova_high_score"] == "700"


def test_failed_write_is_tolerated() -> None:
    assert HighScoreBook(BrokenStore()).record(900, 100) == 900


def test_json_file_round_trip(tmp_path) -> None:
    path = tmp_path / "scores" / "high_scores.json"
    book = HighScoreBook(JsonFileStore(path))
    assert book.load() == 0
    book.record(1240, 0)
    assert json.loads(path.read_text()) == {"soo_nova_high_score": "1240"}
    assert HighScoreBook(JsonFileStore(path)).load() == 1240


def test_json_file_keeps_other_keys(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"lang": "zh"}))
    JsonFileStore(path).set("soo_nova_high_score", "80")
    assert json.loads(path.read_text()) == {"lang": "zh", "soo_nova_high_score": "80"}


def test_corrupt_json_file(tmp_path) -> None:
    path = tmp_path / "high_scores.json"
    path.write_text("{not json")
    book = HighScoreBook(JsonFileStore(path))
    assert book.load() == 0
    book.record(60, 0)
    assert book.load() == 60


def test_store_must_implement_both_methods() -> None:
    class ReadOnlyStore(KeyValueStore):
        def get(self, key):
            return None

    with pytest.raises(TypeError):
        ReadOnlyStore()
