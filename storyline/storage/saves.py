"""Game save CRUD (one <id>.json file per save)."""

from pathlib import Path

from storyline.models import GameSave

from .core import delete_json, next_id, read_json, record_ids, saves_dir, write_json


def _save_path(save_id: int) -> Path:
    return saves_dir() / f"{save_id}.json"


def get_save(save_id: int) -> GameSave | None:
    data = read_json(_save_path(save_id))
    if data is None:
        return None
    return GameSave.model_validate(data)


def list_saves(user_id: int | None = None) -> list[GameSave]:
    """All saves, optionally restricted to one user, newest update first."""
    saves = []
    for save_id in record_ids(saves_dir()):
        save = get_save(save_id)
        if save is None:
            continue
        if user_id is None or save.user_id == user_id:
            saves.append(save)
    saves.sort(key=lambda s: s.last_update, reverse=True)
    return saves


def find_save_by_player(player_character_id: int) -> GameSave | None:
    for save in list_saves():
        if save.player_character_id == player_character_id:
            return save
    return None


def next_save_id() -> int:
    return next_id(saves_dir())


def put_save(save: GameSave) -> None:
    """Insert or overwrite a save."""
    write_json(_save_path(save.id), save.model_dump(mode="json"))


def delete_save(save_id: int) -> bool:
    return delete_json(_save_path(save_id))
