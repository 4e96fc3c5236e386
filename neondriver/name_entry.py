"""The new-game name entry: typed name editing and starting a fresh save."""

from __future__ import annotations

from dataclasses import dataclass

from neondriver.save import SaveData, SaveStore

MAX_NAME_LENGTH = 20
"""Longest name, counted in UTF-8 bytes."""

PLACEHOLDER_TEXT = "Type your name..."

INPUT_FIELD_WIDTH = 400.0
INPUT_FIELD_HEIGHT = 50.0
INPUT_FIELD_PADDING = 15.0
INPUT_FIELD_BORDER_WIDTH = 2.0

MENU_TEXT_COLOR = (0.9, 0.9, 0.9)
ERROR_TEXT_COLOR = (1.0, 0.3, 0.3)
INPUT_BACKGROUND_COLOR = (0.2, 0.2, 0.25)
INPUT_BORDER_COLOR = (0.4, 0.4, 0.5)
PLACEHOLDER_COLOR = (0.5, 0.5, 0.5)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _allowed(ch: str) -> bool:
    return ch.isalnum() or ch in " _-"


class NameEntryError(Exception):
    """A new game could not be started; the message is shown to the player."""


@dataclass
class NameInput:
    """The name being typed on the new-game screen."""

    text: str = ""

    def type_text(self, text: str) -> None:
        """Append the allowed characters of a key press, unless they would exceed the limit."""
        valid = "".join(ch for ch in text if _allowed(ch))
        if _byte_len(self.text) + _byte_len(valid) <= MAX_NAME_LENGTH:
            self.text += valid

    def backspace(self) -> None:
        """Remove the last character, if any."""
        self.text = self.text[:-1]

    def space(self) -> None:
        """Append a space, but never as the first character or beyond the limit."""
        if self.text and _byte_len(self.text) < MAX_NAME_LENGTH:
            self.text += " "

    def display(self) -> tuple[str, tuple[float, float, float]]:
        """Text and colour for the input field: the placeholder, or the name with a cursor."""
        if not self.text:
            return PLACEHOLDER_TEXT, PLACEHOLDER_COLOR
        return f"{self.text}_", MENU_TEXT_COLOR


def start_new_game(name: str, store: SaveStore) -> SaveData:
    """Create and store a save for a new player; raises NameEntryError on failure."""
    name = name.strip()
    if not name:
        raise NameEntryError("Please enter a name")
    if store.exists(name):
        raise NameEntryError("Name already exists! Choose another.")

    save_data = SaveData.create(name)
    try:
        store.save(save_data)
    except OSError as exc:
        raise NameEntryError(f"Failed to save: {exc}") from exc
    return save_data