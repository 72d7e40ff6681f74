"""Dialogue cursor: walks a save through the current node's ordered lines.

current_dialogue_index == len(lines) means the lines are exhausted and the
player should be shown the node's choices.
"""

from storyline import storage
from storyline.sessions import require_save
from storyline.views import DialogueView, dialogue_view


@storage.transactional
def get_next_dialogue(save_id: int) -> DialogueView | None:
    """Return the line under the cursor and move the cursor past it.

    Not idempotent: repeated calls walk forward. None once exhausted.
    """
    save = require_save(save_id)
    lines = storage.get_dialogues_in_node(save.current_story_node_id)
    if save.current_dialogue_index >= len(lines):
        return None
    line = lines[save.current_dialogue_index]
    save.current_dialogue_index += 1
    storage.put_save(save)
    return dialogue_view(line)


@storage.transactional
def skip_to_last_dialogue(save_id: int) -> DialogueView | None:
    """Put the cursor on the final line and return it. None if the node has no lines."""
    save = require_save(save_id)
    lines = storage.get_dialogues_in_node(save.current_story_node_id)
    if not lines:
        return None
    save.current_dialogue_index = len(lines) - 1
    storage.put_save(save)
    return dialogue_view(lines[-1])


def is_dialogue_complete(save_id: int) -> bool:
    save = require_save(save_id)
    return save.current_dialogue_index >= len(storage.get_dialogues_in_node(save.current_story_node_id))
