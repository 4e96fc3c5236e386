"""Player save games: progress data and its JSON storage on disk."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from platformdirs import user_data_path

_APP_NAME = "BevyDriver"
_TIMESTAMP_RE = re.compile(r"^(?P<base>[^.]+?)(?:\.(?P<frac>\d+))?(?P<tz>Z|[+-]\d\d:\d\d)$")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, allowing a 'Z' suffix and nanosecond fractions."""
    match = _TIMESTAMP_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    frac = (match.group("frac") or "")[:6].ljust(6, "0")
    tz = match.group("tz")
    offset = "+00:00" if tz == "Z" else tz
    moment = datetime.fromisoformat(f"{match.group('base')}.{frac}{offset}")
    return moment.astimezone(timezone.utc)


def sanitize_filename(name: str) -> str:
    """Replace every character that is not alphanumeric, '_' or '-' with '_'."""
    return "".join(c if c.isalnum() or c in "_-" else "_" for c in name)


@dataclass
class SaveData:
    """A saved game with the player's progress."""

    player_name: str
    highest_level_unlocked: int = 1
    level_times: dict[int, float] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utc_now)
    last_played: datetime = field(default_factory=_utc_now)

    @classmethod
    def create(cls, player_name: str) -> SaveData:
        """A fresh save for a new player, with only level 1 unlocked."""
        now = _utc_now()
        return cls(player_name=player_name, created_at=now, last_played=now)

    def record_level_completion(self, level: int, time: float) -> bool:
        """Record a completion; unlock the next level; return True if it is a new best."""
        self.last_played = _utc_now()

        if level >= self.highest_level_unlocked:
            self.highest_level_unlocked = level + 1

        best = self.level_times.get(level)
        is_new_best = best is None or time < best
        if is_new_best:
            self.level_times[level] = time
        return is_new_best

    def best_time(self, level: int) -> float | None:
        """Best completion time for a level, or None if it was never completed."""
        return self.level_times.get(level)

    def filename(self) -> str:
        """File name for this save, derived from the player name."""
        return f"{sanitize_filename(self.player_name)}.json"

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "player_name": self.player_name,
            "highest_level_unlocked": self.highest_level_unlocked,
            "level_times": {str(level): t for level, t in self.level_times.items()},
            "created_at": _format_timestamp(self.created_at),
            "last_played": _format_timestamp(self.last_played),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SaveData:
        """Build a save from its JSON representation; raises ValueError if malformed."""
        try:
            player_name = data["player_name"]
            highest = data["highest_level_unlocked"]
            if not isinstance(player_name, str):
                raise TypeError("player_name must be a string")
            if isinstance(highest, bool) or not isinstance(highest, int) or highest < 0:
                raise TypeError("highest_level_unlocked must be a non-negative integer")
            level_times = {int(k): float(v) for k, v in data["level_times"].items()}
            return cls(
                player_name=player_name,
                highest_level_unlocked=highest,
                level_times=level_times,
                created_at=_parse_timestamp(data["created_at"]),
                last_played=_parse_timestamp(data["last_played"]),
            )
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            raise ValueError(f"invalid save data: {exc}") from exc


def default_save_dir() -> Path:
    """Directory where save files live by default."""
    return user_data_path(_APP_NAME, _APP_NAME) / "saves"


class SaveStore:
    """Save files kept as JSON in one directory, created on first use."""

    def __init__(self, directory: str | Path | None = None) -> None:
        self._directory = Path(directory) if directory is not None else default_save_dir()

    @property
    def directory(self) -> Path:
        return self._directory

    def _ensure_dir(self) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        return self._directory

    def save(self, save_data: SaveData) -> Path:
        """Write a save to its file and return the path."""
        path = self._ensure_dir() / save_data.filename()
        path.write_text(json.dumps(save_data.to_dict(), indent=2), encoding="utf-8")
        return path

    def load(self, filename: str) -> SaveData:
        """Read a save file; raises OSError if unreadable, ValueError if malformed."""
        path = self._ensure_dir() / filename
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("invalid save data: expected an object")
        return SaveData.from_dict(data)

    def delete(self, filename: str) -> None:
        """Remove a save file; raises FileNotFoundError if it does not exist."""
        (self._ensure_dir() / filename).unlink()

    def list_saves(self) -> list[SaveData]:
        """All readable saves, most recently played first."""
        saves: list[SaveData] = []
        for path in self._ensure_dir().iterdir():
            if path.suffix != ".json":
                continue
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    saves.append(SaveData.from_dict(data))
            except (OSError, ValueError):
                continue
        saves.sort(key=lambda s: s.last_played, reverse=True)
        return saves

    def exists(self, player_name: str) -> bool:
        """Whether a save file exists for the player name."""
        try:
            directory = self._ensure_dir()
        except OSError:
            return False
        return (directory / f"{sanitize_filename(player_name)}.json").exists()