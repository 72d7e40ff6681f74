"""Player character CRUD (one <id>.json file per player character)."""

from pathlib import Path

from storyline.models import PlayerCharacter

from .core import delete_json, next_id, players_dir, read_json, write_json


def _player_path(player_id: int) -> Path:
    return players_dir() / f"{player_id}.json"


def get_player_character(player_id: int) -> PlayerCharacter | None:
    data = read_json(_player_path(player_id))
    if data is None:
        return None
    return PlayerCharacter.model_validate(data)


def next_player_id() -> int:
    return next_id(players_dir())


def put_player_character(player: PlayerCharacter) -> None:
    write_json(_player_path(player.id), player.model_dump(mode="json"))


def delete_player_character(player_id: int) -> bool:
    return delete_json(_player_path(player_id))
