import pytest

from neondriver.name_entry import (
    MAX_NAME_LENGTH,
    MENU_TEXT_COLOR,
    PLACEHOLDER_COLOR,
    PLACEHOLDER_TEXT,
    NameEntryError,
    NameInput,
    start_new_game,
)
from neondriver.save import SaveStore


def test_type_text_filters_disallowed_characters():
    name = NameInput()
    name.type_text("ab!c")
    assert name.text == "abc"


def test_type_text_keeps_allowed_punctuation():
    name = NameInput()
    name.type_text("a_b-c")
    assert name.text == "a_b-c"


def test_type_text_rejects_overflow():
    name = NameInput("a" * MAX_NAME_LENGTH)
    name.type_text("b")
    assert name.text == "a" * MAX_NAME_LENGTH


def test_type_text_rejects_whole_chunk_that_overflows():
    name = NameInput("a" * (MAX_NAME_LENGTH - 1))
    name.type_text("bc")
    assert name.text == "a" * (MAX_NAME_LENGTH - 1)


def test_type_text_fills_to_limit():
    name = NameInput("a" * (MAX_NAME_LENGTH - 1))
    name.type_text("b")
    assert name.text == "a" * (MAX_NAME_LENGTH - 1) + "b"


def test_space_ignored_when_empty():
    name = NameInput()
    name.space()
    assert name.text == ""


def test_space_appended_after_text():
    name = NameInput("Al")
    name.space()
    assert name.text == "Al "


def test_space_ignored_at_limit():
    name = NameInput("a" * MAX_NAME_LENGTH)
    name.space()
    assert name.text == "a" * MAX_NAME_LENGTH


def test_backspace_removes_last_and_tolerates_empty():
    name = NameInput("ab")
    name.backspace()
    assert name.text == "a"
    name.backspace()
    name.backspace()
    assert name.text == ""


def test_display_placeholder_when_empty():
    assert NameInput().display() == (PLACEHOLDER_TEXT, PLACEHOLDER_COLOR)


def test_display_shows_cursor():
    assert NameInput("abc").display() == ("abc_", MENU_TEXT_COLOR)


def test_start_new_game_rejects_blank(tmp_path):
    with pytest.raises(NameEntryError, match="Please enter a name"):
        start_new_game("   ", SaveStore(tmp_path))


def test_start_new_game_creates_save(tmp_path):
    store = SaveStore(tmp_path)
    save = start_new_game("  Eve  ", store)
    assert save.player_name == "Eve"
    assert save.highest_level_unlocked == 1
    assert store.exists("Eve") is True
    assert store.load(save.filename()) == save


def test_start_new_game_rejects_duplicate(tmp_path):
    store = SaveStore(tmp_path)
    start_new_game("Eve", store)
    with pytest.raises(NameEntryError, match="Name already exists! Choose another."):
        start_new_game("Eve", store)


def test_start_new_game_reports_save_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(NameEntryError, match="^Failed to save: "):
        start_new_game("Eve", SaveStore(blocker))