"""Story navigation, choice, and dialogue endpoints for a save.

Operations that legitimately return nothing (go back at the root, dialogue
exhausted, ...) respond 404; the frontend treats that as "show choices" or
"nothing to do".
"""

from fastapi import APIRouter, HTTPException

from storyline import choices, dialogue, navigation
from storyline.views import ChoiceView, DialogueView, NodeView

from .errors import http_errors

router = APIRouter()


@router.get("/games/{save_id}/node")
async def current_node(save_id: int) -> NodeView:
    """Get the node the save is on, with ordered dialogues and choices."""
    with http_errors():
        return navigation.get_current_node(save_id)


@router.post("/games/{save_id}/navigate/{node_id}")
async def navigate(save_id: int, node_id: int) -> NodeView:
    """Jump to a node (not undoable with back)."""
    with http_errors():
        view = navigation.navigate_to_node(save_id, node_id)
    if view is None:
        raise HTTPException(404, "Story node not found")
    return view


@router.post("/games/{save_id}/back")
async def go_back(save_id: int) -> NodeView:
    """Undo the last choice."""
    with http_errors():
        view = navigation.go_back(save_id)
    if view is None:
        raise HTTPException(404, "Nothing to go back to")
    return view


@router.post("/games/{save_id}/forward")
async def go_forward(save_id: int) -> NodeView:
    """Follow the current node's first choice."""
    with http_errors():
        view = navigation.go_forward(save_id)
    if view is None:
        raise HTTPException(404, "No way forward")
    return view


@router.get("/games/{save_id}/choices")
async def available_choices(save_id: int) -> list[ChoiceView]:
    """List the choices leaving the current node."""
    with http_errors():
        return choices.get_available_choices(save_id)


@router.post("/games/{save_id}/choices/{choice_id}")
async def make_choice(save_id: int, choice_id: int) -> NodeView:
    """Take a choice from the current node."""
    with http_errors():
        return choices.make_choice(save_id, choice_id)


@router.post("/games/{save_id}/dialogue/next")
async def next_dialogue(save_id: int) -> DialogueView:
    """Return the next dialogue line and advance the cursor."""
    with http_errors():
        line = dialogue.get_next_dialogue(save_id)
    if line is None:
        raise HTTPException(404, "No more dialogue")
    return line


@router.post("/games/{save_id}/dialogue/skip")
async def skip_dialogue(save_id: int) -> DialogueView:
    """Jump to the node's last dialogue line."""
    with http_errors():
        line = dialogue.skip_to_last_dialogue(save_id)
    if line is None:
        raise HTTPException(404, "Node has no dialogue")
    return line


@router.get("/games/{save_id}/dialogue/complete")
async def dialogue_complete(save_id: int):
    """Whether every dialogue line of the current node has been shown."""
    with http_errors():
        return {"complete": dialogue.is_dialogue_complete(save_id)}


@router.get("/games/{save_id}/visited")
async def visited_nodes(save_id: int) -> list[int]:
    """Node ids the save has left, oldest first."""
    with http_errors():
        return navigation.get_visited_nodes(save_id)


@router.get("/games/{save_id}/visited/{node_id}")
async def has_visited(save_id: int, node_id: int) -> bool:
    """Whether a node appears in the save's history."""
    with http_errors():
        return navigation.has_visited_node(save_id, node_id)
