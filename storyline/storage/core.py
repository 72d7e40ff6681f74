"""Storage initialization, path helpers, and JSON record I/O.

Every read and write of a mutable record goes through read_json / write_json /
delete_json so that an active unit of work (see .transaction) can stage
writes and serve its own pending state back to later reads.
"""

import json
from pathlib import Path
from typing import Any

from .transaction import current_unit

_data_dir: Path | None = None
_presets_dir: Path | None = None


def init_storage(data_dir: Path, presets_dir: Path | None = None) -> None:
    global _data_dir, _presets_dir
    from . import story as _story_mod

    _data_dir = data_dir
    _data_dir.mkdir(parents=True, exist_ok=True)
    saves_dir().mkdir(exist_ok=True)
    players_dir().mkdir(exist_ok=True)
    if presets_dir is None:
        # Default: repo_root/presets
        presets_dir = Path(__file__).parent.parent.parent / "presets"
    _presets_dir = presets_dir
    _story_mod._graph = None  # reset cached story graph


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_storage() before using storage"
    return _data_dir


def presets_dir() -> Path:
    assert _presets_dir is not None, "Call init_storage() before using storage"
    return _presets_dir


def saves_dir() -> Path:
    return data_dir() / "saves"


def players_dir() -> Path:
    return data_dir() / "player-characters"


def story_dir() -> Path:
    return presets_dir() / "story"


def read_json(path: Path) -> Any | None:
    """Load a record, preferring staged state of the active unit. None if missing."""
    unit = current_unit()
    if unit is not None and unit.has_pending(path):
        text = unit.pending_text(path)
        return None if text is None else json.loads(text)
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def write_json(path: Path, data: Any) -> None:
    """Write a record, or stage it if a unit of work is active."""
    text = json.dumps(data, indent=2)
    unit = current_unit()
    if unit is not None:
        unit.stage_write(path, text)
        return
    path.write_text(text)


def delete_json(path: Path) -> bool:
    """Delete a record. Returns False if it did not exist."""
    if read_json(path) is None:
        return False
    unit = current_unit()
    if unit is not None:
        unit.stage_delete(path)
    else:
        path.unlink()
    return True


def record_ids(directory: Path) -> list[int]:
    """Integer ids of the <id>.json records in a directory, staged state included."""
    ids = {int(p.stem) for p in directory.glob("*.json") if p.stem.isdigit()}
    unit = current_unit()
    if unit is not None:
        for path, text in unit.pending_in(directory):
            if not path.stem.isdigit():
                continue
            if text is None:
                ids.discard(int(path.stem))
            else:
                ids.add(int(path.stem))
    return sorted(ids)


def next_id(directory: Path) -> int:
    return max(record_ids(directory), default=0) + 1
