import json
from datetime import datetime, timedelta, timezone

import pytest

from neondriver.save import SaveData, SaveStore, default_save_dir, sanitize_filename


def test_create_starts_at_level_one_with_no_times():
    save = SaveData.create("Alice")
    assert save.player_name == "Alice"
    assert save.highest_level_unlocked == 1
    assert save.level_times == {}
    assert save.created_at == save.last_played


def test_first_completion_is_new_best_and_unlocks_next():
    save = SaveData.create("Alice")
    assert save.record_level_completion(1, 12.5) is True
    assert save.best_time(1) == 12.5
    assert save.highest_level_unlocked == 2


def test_slower_time_keeps_best():
    save = SaveData.create("Alice")
    save.record_level_completion(1, 10.0)
    assert save.record_level_completion(1, 15.0) is False
    assert save.best_time(1) == 10.0


def test_faster_time_replaces_best():
    save = SaveData.create("Alice")
    save.record_level_completion(1, 10.0)
    assert save.record_level_completion(1, 8.0) is True
    assert save.best_time(1) == 8.0


def test_completing_lower_level_keeps_unlocks():
    save = SaveData.create("Alice")
    save.record_level_completion(3, 20.0)
    save.record_level_completion(1, 9.0)
    assert save.highest_level_unlocked == 4


def test_completion_updates_last_played():
    save = SaveData.create("Alice")
    old = datetime(2000, 1, 1, tzinfo=timezone.utc)
    save.last_played = old
    save.record_level_completion(1, 5.0)
    assert save.last_played > old


def test_best_time_none_for_unplayed_level():
    assert SaveData.create("Alice").best_time(2) is None


def test_sanitize_replaces_invalid_characters():
    assert sanitize_filename("Player One!") == "Player_One_"


def test_sanitize_keeps_allowed_characters():
    assert sanitize_filename("abc-_9") == "abc-_9"


def test_filename_uses_sanitized_name():
    assert SaveData.create("Player One!").filename() == "Player_One_.json"


def test_dict_round_trip():
    save = SaveData.create("Bob")
    save.record_level_completion(1, 12.5)
    save.record_level_completion(2, 30.25)
    restored = SaveData.from_dict(json.loads(json.dumps(save.to_dict())))
    assert restored == save


def test_level_time_keys_serialize_as_strings():
    save = SaveData.create("Bob")
    save.record_level_completion(1, 12.5)
    assert save.to_dict()["level_times"] == {"1": 12.5}


def test_from_dict_accepts_nanosecond_timestamps():
    data = {
        "player_name": "Bob",
        "highest_level_unlocked": 2,
        "level_times": {"1": 4.5},
        "created_at": "2024-01-02T03:04:05.123456789Z",
        "last_played": "2024-01-02T03:04:05Z",
    }
    save = SaveData.from_dict(data)
    assert save.created_at == datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc)
    assert save.last_played == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert save.level_times == {1: 4.5}


def test_from_dict_rejects_missing_fields():
    with pytest.raises(ValueError):
        SaveData.from_dict({"player_name": "Bob"})


def test_default_save_dir_ends_in_saves():
    assert default_save_dir().name == "saves"


def test_store_save_and_load(tmp_path):
    store = SaveStore(tmp_path / "saves")
    save = SaveData.create("Carol")
    save.record_level_completion(1, 7.5)
    path = store.save(save)
    assert path.exists()
    assert store.load(save.filename()) == save


def test_store_exists_and_delete(tmp_path):
    store = SaveStore(tmp_path)
    save = SaveData.create("Dan Smith")
    assert store.exists("Dan Smith") is False
    store.save(save)
    assert store.exists("Dan Smith") is True
    store.delete(save.filename())
    assert store.exists("Dan Smith") is False


def test_store_delete_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SaveStore(tmp_path).delete("nobody.json")


def test_store_load_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SaveStore(tmp_path).load("nobody.json")


def test_store_load_invalid_json_raises(tmp_path):
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        SaveStore(tmp_path).load("bad.json")


def test_list_saves_sorted_and_skips_invalid(tmp_path):
    store = SaveStore(tmp_path)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    older = SaveData("Old", created_at=base, last_played=base)
    newer = SaveData("New", created_at=base, last_played=base + timedelta(days=1))
    store.save(older)
    store.save(newer)
    (tmp_path / "broken.json").write_text("[]", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")
    names = [s.player_name for s in store.list_saves()]
    assert names == ["New", "Old"]


def test_store_creates_directory(tmp_path):
    target = tmp_path / "nested" / "dir"
    store = SaveStore(target)
    assert store.list_saves() == []
    assert target.is_dir()