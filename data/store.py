# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""File-based game store.

Each game is one JSON file, ``<root>/<game_id>.json``, holding the game in
its camelCase wire shape. Writes go to a temp file that is then renamed
over the target, so a crash mid-write never leaves a half-written game.

Usage::

    from data.store import GameStore

    store = GameStore()                    # uses SCOREBOOK_DATA_DIR or data/games/
    store = GameStore("/tmp/games")        # custom directory

    store.save_game(game)                  # insert or update, stamps updatedAt
    game = store.load_game(game.id)        # None if missing or unreadable
    games = store.list_games()
    store.delete_game(game.id)

There is no locking: if two sessions write the same game, the last full
write wins.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from config import get_data_dir
from models import Game

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class GameStore:
    """JSON-file persistence for games.

    Args:
        root_dir: Directory holding one file per game.  Created on first
            write.  Defaults to :func:`config.get_data_dir`.
    """

    def __init__(self, root_dir: str | Path | None = None) -> None:
        self._root = Path(root_dir) if root_dir is not None else get_data_dir()

    # -- public API --------------------------------------------------------

    @property
    def root_dir(self) -> Path:
        return self._root

    def list_games(self) -> list[Game]:
        """All readable games, oldest first."""
        if not self._root.exists():
            return []
        games = []
        for path in sorted(self._root.glob("*.json")):
            game = self._read(path)
            if game is not None:
                games.append(game)
        games.sort(key=lambda g: g.created_at)
        return games

    def load_game(self, game_id: str) -> Optional[Game]:
        path = self._path_for(game_id)
        if path is None or not path.exists():
            return None
        return self._read(path)

    def save_game(self, game: Game) -> Game:
        """Insert or update *game* by id and stamp its update time.

        Returns the stored copy; the argument is left untouched.
        """
        path = self._path_for(game.id)
        if path is None:
            raise ValueError(f"Invalid game id: {game.id!r}")
        stored = game.model_copy(update={"updated_at": _now()})
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        with open(tmp_path, "w") as f:
            json.dump(stored.to_wire(), f, ensure_ascii=False, indent=2)
        tmp_path.replace(path)  # atomic rename
        return stored

    def delete_game(self, game_id: str) -> bool:
        """Remove a stored game.  Returns ``False`` if it did not exist."""
        path = self._path_for(game_id)
        if path is None or not path.exists():
            return False
        path.unlink()
        return True

    # -- helpers -----------------------------------------------------------

    def _path_for(self, game_id: str) -> Optional[Path]:
        if not _SAFE_ID.match(game_id or ""):
            return None
        return self._root / f"{game_id}.json"

    def _read(self, path: Path) -> Optional[Game]:
        try:
            with open(path) as f:
                payload = json.load(f)
            return Game.model_validate(payload)
        except (json.JSONDecodeError, OSError, ValidationError) as exc:
            logger.warning("Skipping unreadable game file %s: %s", path.name, exc)
            return None
