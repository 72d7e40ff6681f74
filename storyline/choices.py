"""Choice resolution: validate a chosen edge, advance, apply its health effect."""

import logging

from storyline import storage
from storyline.errors import InvalidChoiceError, NotFoundError
from storyline.health import apply_health_delta
from storyline.navigation import advance
from storyline.sessions import require_save
from storyline.views import ChoiceView, NodeView, choice_view

logger = logging.getLogger(__name__)


@storage.transactional
def make_choice(save_id: int, choice_id: int) -> NodeView:
    """Take a choice from the save's current node.

    Raises NotFoundError for a missing save, choice, or target node, and
    InvalidChoiceError if the choice leaves from a different node. Either
    way nothing is written.
    """
    save = require_save(save_id)
    choice = storage.get_choice(choice_id)
    if choice is None:
        raise NotFoundError("Choice", choice_id)
    if choice.story_node_id != save.current_story_node_id:
        raise InvalidChoiceError(choice_id, save.current_story_node_id)
    if not storage.story_node_exists(choice.next_story_node_id):
        raise NotFoundError("StoryNode", choice.next_story_node_id)

    # Recorded before the move so go_back() can recover the source node.
    save.last_choice_id = choice.id
    storage.put_save(save)

    view = advance(save, choice.next_story_node_id)
    if choice.health_effect:
        apply_health_delta(save, choice.health_effect)
    logger.debug("Save %d took choice %d", save.id, choice.id)
    return view


def get_available_choices(save_id: int) -> list[ChoiceView]:
    save = require_save(save_id)
    return [choice_view(c) for c in storage.get_choices_in_node(save.current_story_node_id)]
