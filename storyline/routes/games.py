"""Game save lifecycle endpoints."""

from fastapi import APIRouter

from storyline import sessions
from storyline.views import GameSaveView, GameStateView, save_view

from .errors import http_errors
from .models import StartGame, UpdateGameSave

router = APIRouter()


@router.post("/games", status_code=201)
async def start_game(body: StartGame) -> GameSaveView:
    """Start a new game at the story's start node."""
    with http_errors():
        return save_view(sessions.create_game(body.user_id, body.save_name))


@router.get("/games/{save_id}")
async def load_game(save_id: int) -> GameSaveView:
    """Load a single game save."""
    with http_errors():
        return save_view(sessions.get_game_save(save_id))


@router.get("/users/{user_id}/games")
async def list_user_games(user_id: int) -> list[GameSaveView]:
    """List a user's game saves, most recently played first."""
    return [save_view(s) for s in sessions.get_user_game_saves(user_id)]


@router.patch("/games/{save_id}")
async def update_game(save_id: int, body: UpdateGameSave) -> GameSaveView:
    """Rename a save or move it to another node."""
    with http_errors():
        save = sessions.update_game_save(
            save_id,
            save_name=body.save_name,
            current_story_node_id=body.current_story_node_id,
        )
    return save_view(save)


@router.delete("/games/{save_id}")
async def delete_game(save_id: int):
    """Delete a game save and its player character."""
    with http_errors():
        sessions.delete_game_save(save_id)
    return {"ok": True}


@router.get("/games/{save_id}/state")
async def game_state(save_id: int) -> GameStateView:
    """Save, player, current node, and available choices in one response."""
    with http_errors():
        return sessions.get_game_state(save_id)
