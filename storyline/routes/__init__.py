"""FastAPI API endpoints under /api.

Endpoint groups: health + settings, game saves (/games, /users/{id}/games),
story navigation / choices / dialogue for a save (/games/{save_id}/...),
and player characters (/players/{id}).
"""

from fastapi import APIRouter

from .games import router as games_router
from .players import router as players_router
from .settings import router as settings_router
from .story import router as story_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(games_router)
router.include_router(story_router)
router.include_router(players_router)
