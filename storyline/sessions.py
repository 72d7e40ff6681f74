"""Game session lifecycle: create, load, list, update, delete saves.

A new game creates one PlayerCharacter and one GameSave in a single unit of
work. The save sits on the configured start node with empty history, no last
choice, dialogue index 0, and the configured starting health.
"""

import logging

from storyline import storage
from storyline.errors import NotFoundError
from storyline.models import GameSave, PlayerCharacter
from storyline.views import (
    GameStateView,
    choice_view,
    node_view,
    player_view,
)

logger = logging.getLogger(__name__)


def require_save(save_id: int) -> GameSave:
    save = storage.get_save(save_id)
    if save is None:
        raise NotFoundError("GameSave", save_id)
    return save


def require_player(player_id: int) -> PlayerCharacter:
    player = storage.get_player_character(player_id)
    if player is None:
        raise NotFoundError("PlayerCharacter", player_id)
    return player


@storage.transactional
def create_game(user_id: int, save_name: str) -> GameSave:
    config = storage.get_config()
    start_node_id = config["start_node_id"]
    if not storage.story_node_exists(start_node_id):
        raise NotFoundError("StoryNode", start_node_id)
    health = max(0, config["starting_health"])

    player = PlayerCharacter(
        id=storage.next_player_id(),
        name=config["player_name"],
        user_id=user_id,
        health=health,
        current_story_node_id=start_node_id,
    )
    storage.put_player_character(player)

    save = GameSave(
        id=storage.next_save_id(),
        user_id=user_id,
        player_character_id=player.id,
        save_name=save_name,
        current_story_node_id=start_node_id,
        health=health,
    )
    storage.put_save(save)
    logger.info("Created game save %d for user %d at node %d", save.id, user_id, start_node_id)
    return save


def get_game_save(save_id: int) -> GameSave:
    return require_save(save_id)


def get_user_game_saves(user_id: int) -> list[GameSave]:
    return storage.list_saves(user_id=user_id)


@storage.transactional
def delete_game_save(save_id: int) -> bool:
    """Delete a save and the player character created with it."""
    save = require_save(save_id)
    storage.delete_save(save_id)
    storage.delete_player_character(save.player_character_id)
    logger.info("Deleted game save %d", save_id)
    return True


@storage.transactional
def update_game_save(
    save_id: int,
    save_name: str | None = None,
    current_story_node_id: int | None = None,
) -> GameSave:
    """Rename a save and/or move it to another node.

    Moving resets the dialogue cursor and forgets the last choice (the new
    node was not reached through one). History is left untouched.
    """
    save = require_save(save_id)
    if save_name is not None:
        save.save_name = save_name
    if current_story_node_id is not None and current_story_node_id != save.current_story_node_id:
        if not storage.story_node_exists(current_story_node_id):
            raise NotFoundError("StoryNode", current_story_node_id)
        save.current_story_node_id = current_story_node_id
        save.current_dialogue_index = 0
        save.last_choice_id = None
        sync_player_mirror(save)
    save.touch()
    storage.put_save(save)
    return save


def sync_player_mirror(save: GameSave) -> None:
    """Copy health and position onto the save's player character, if it still exists."""
    player = storage.get_player_character(save.player_character_id)
    if player is None:
        return
    player.health = save.health
    player.current_story_node_id = save.current_story_node_id
    storage.put_player_character(player)


def get_game_state(save_id: int) -> GameStateView:
    save = require_save(save_id)
    player = storage.get_player_character(save.player_character_id)
    return GameStateView(
        save_id=save.id,
        health=save.health,
        player_character=player_view(player) if player else None,
        current_story_node=node_view(save.current_story_node_id),
        available_choices=[
            choice_view(c) for c in storage.get_choices_in_node(save.current_story_node_id)
        ],
        visited_node_ids=save.visited_node_ids,
    )
