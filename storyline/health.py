"""Health mutation.

GameSave.health is the canonical value; the save's PlayerCharacter carries a
mirror that is rewritten in the same unit of work. Health is clamped at 0.
"""

import logging

from storyline import storage
from storyline.models import GameSave
from storyline.sessions import require_player, require_save, sync_player_mirror
from storyline.views import PlayerCharacterView, player_view

logger = logging.getLogger(__name__)


def store_health(save: GameSave, health: int) -> int:
    """Core routine: clamp, persist save and mirror. No unit of work of its own."""
    save.health = max(0, health)
    save.touch()
    storage.put_save(save)
    sync_player_mirror(save)
    return save.health


def apply_health_delta(save: GameSave, delta: int) -> int:
    health = store_health(save, save.health + delta)
    logger.debug("Save %d health %+d -> %d", save.id, delta, health)
    return health


@storage.transactional
def modify_health(save_id: int, delta: int) -> int:
    return apply_health_delta(require_save(save_id), delta)


@storage.transactional
def modify_player_health(player_character_id: int, delta: int) -> int:
    """Apply a health delta addressed by player character id.

    Goes through the player's save when it has one; otherwise clamps the
    player record alone.
    """
    player = require_player(player_character_id)
    save = storage.find_save_by_player(player_character_id)
    if save is not None:
        return apply_health_delta(save, delta)
    player.health = max(0, player.health + delta)
    storage.put_player_character(player)
    return player.health


@storage.transactional
def set_health(player_character_id: int, health: int) -> int:
    """Overwrite a player character's health, clamped at 0."""
    player = require_player(player_character_id)
    save = storage.find_save_by_player(player_character_id)
    if save is not None:
        logger.debug("Save %d health set to %d", save.id, health)
        return store_health(save, health)
    player.health = max(0, health)
    storage.put_player_character(player)
    return player.health


def get_health(player_character_id: int) -> int:
    """Current health of a player character, read from its save when it has one."""
    player = require_player(player_character_id)
    save = storage.find_save_by_player(player_character_id)
    return save.health if save is not None else player.health


def is_alive(player_character_id: int) -> bool:
    return get_health(player_character_id) > 0


def heal(save_id: int, amount: int) -> int:
    return modify_health(save_id, amount)


def damage(save_id: int, amount: int) -> int:
    return modify_health(save_id, -amount)


def get_player_state(player_character_id: int) -> PlayerCharacterView:
    return player_view(require_player(player_character_id))
