"""Player state and health endpoints."""

from fastapi import APIRouter

from storyline import health
from storyline.views import PlayerCharacterView

from .errors import http_errors
from .models import HealthDelta, SetHealth

router = APIRouter()


@router.get("/players/{player_id}")
async def player_state(player_id: int) -> PlayerCharacterView:
    """Get a player character (name, health, position)."""
    with http_errors():
        return health.get_player_state(player_id)


@router.post("/players/{player_id}/health")
async def modify_player_health(player_id: int, body: HealthDelta):
    """Apply a health delta to a player character. Health never drops below 0."""
    with http_errors():
        return {"health": health.modify_player_health(player_id, body.delta)}


@router.post("/games/{save_id}/health")
async def modify_save_health(save_id: int, body: HealthDelta):
    """Apply a health delta to a save. Health never drops below 0."""
    with http_errors():
        return {"health": health.modify_health(save_id, body.delta)}


@router.get("/players/{player_id}/health")
async def player_health(player_id: int):
    """Get a player character's health and whether it is still alive."""
    with http_errors():
        return {"health": health.get_health(player_id), "alive": health.is_alive(player_id)}


@router.put("/players/{player_id}/health")
async def set_player_health(player_id: int, body: SetHealth):
    """Overwrite a player character's health. Values below 0 are stored as 0."""
    with http_errors():
        return {"health": health.set_health(player_id, body.health)}


@router.get("/players/{player_id}/alive")
async def player_alive(player_id: int):
    """Whether a player character's health is above 0."""
    with http_errors():
        return {"alive": health.is_alive(player_id)}
