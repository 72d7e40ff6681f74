"""Pydantic request models for API endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestBody(BaseModel):
    # The frontend posts camelCase; snake_case is accepted too.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StartGame(RequestBody):
    user_id: int
    save_name: str = ""


class UpdateGameSave(RequestBody):
    save_name: str | None = None
    current_story_node_id: int | None = None


class HealthDelta(RequestBody):
    delta: int


class UpdateSettings(RequestBody):
    start_node_id: int | None = None
    starting_health: int | None = None
    player_name: str | None = None


class SetHealth(RequestBody):
    health: int
