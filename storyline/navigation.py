"""Navigation engine: moves a save's cursor through the story graph.

State kept on the save:
  current_story_node_id   node being viewed
  visited_node_ids        nodes the player has left, oldest first; never two
                          equal entries in a row
  last_choice_id          choice that produced the current node (enables one
                          level of go_back); None at the root, after go_back,
                          and after raw navigation
  current_dialogue_index  reset to 0 whenever the current node changes

advance() is the single mutation primitive for forward movement. It has no
unit of work of its own; the public operations below (and make_choice in
storyline.choices) wrap it in exactly one.
"""

import logging

from storyline import storage
from storyline.errors import NotFoundError
from storyline.models import GameSave
from storyline.sessions import require_save, sync_player_mirror
from storyline.views import NodeView, node_view

logger = logging.getLogger(__name__)


def advance(save: GameSave, target_node_id: int) -> NodeView:
    """Core forward step: record where the player leaves from, then move.

    The caller guarantees target_node_id exists.
    """
    visited = save.visited_node_ids
    if not visited or visited[-1] != save.current_story_node_id:
        visited.append(save.current_story_node_id)

    logger.debug(
        "Save %d: node %d -> %d", save.id, save.current_story_node_id, target_node_id
    )
    save.current_story_node_id = target_node_id
    save.current_dialogue_index = 0
    save.touch()
    storage.put_save(save)
    sync_player_mirror(save)
    return node_view(target_node_id)


def get_current_node(save_id: int) -> NodeView:
    save = require_save(save_id)
    return node_view(save.current_story_node_id)


@storage.transactional
def navigate_to_node(save_id: int, target_node_id: int) -> NodeView | None:
    """Jump to any node. Returns None, without mutating, if the node does not exist.

    The move is not the product of a choice, so last_choice_id is cleared
    and go_back() afterwards returns None. Keeping the old choice would let
    go_back() return to the source of a choice the player did not just take.
    """
    save = require_save(save_id)
    if not storage.story_node_exists(target_node_id):
        return None
    save.last_choice_id = None
    return advance(save, target_node_id)


@storage.transactional
def go_back(save_id: int) -> NodeView | None:
    """Return to the node the last choice was made from.

    History is not touched: the source node is already the tail of
    visited_node_ids, so leaving it again does not duplicate it.
    """
    save = require_save(save_id)
    if save.last_choice_id is None:
        return None

    last_choice = storage.get_choice(save.last_choice_id)
    if last_choice is None:
        raise NotFoundError("Choice", save.last_choice_id)

    previous_node_id = last_choice.story_node_id
    logger.debug("Save %d: back %d -> %d", save.id, save.current_story_node_id, previous_node_id)
    save.last_choice_id = None
    save.current_story_node_id = previous_node_id
    save.current_dialogue_index = 0
    save.touch()
    storage.put_save(save)
    sync_player_mirror(save)
    return node_view(previous_node_id)


@storage.transactional
def go_forward(save_id: int) -> NodeView | None:
    """Follow the first outgoing choice of the current node, by (order, id).

    The choice is recorded as last_choice_id so go_back() can undo it. Its
    health effect is not applied. Returns None, without mutating, when the
    node has no outgoing choices.
    """
    save = require_save(save_id)
    choices = storage.get_choices_in_node(save.current_story_node_id)
    if not choices:
        return None
    first = choices[0]
    if not storage.story_node_exists(first.next_story_node_id):
        return None
    save.last_choice_id = first.id
    return advance(save, first.next_story_node_id)


def get_visited_nodes(save_id: int) -> list[int]:
    return list(require_save(save_id).visited_node_ids)


def has_visited_node(save_id: int, node_id: int) -> bool:
    return node_id in get_visited_nodes(save_id)
