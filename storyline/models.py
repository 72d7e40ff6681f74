"""Core domain models.

Story graph records (StoryNode, Dialogue, Choice, Character) are authored
seed data and never mutated. GameSave and PlayerCharacter are the mutable
per-playthrough records. Pydantic is used for validation and serialisation
at every storage boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, NonNegativeInt, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Story graph
# ---------------------------------------------------------------------------

class StoryNode(BaseModel):
    """A node of the story graph."""

    id: int
    title: str = ""
    description: str = ""
    background_url: str | None = None
    background_music_url: str | None = None
    ambient_sound_url: str | None = None


class Dialogue(BaseModel):
    """One line of narration or speech inside a node."""

    id: int
    story_node_id: int
    order: int
    character_id: int | None = None  # None for narration
    text: str = ""
    health_effect: int | None = None


class Choice(BaseModel):
    """A directed edge from story_node_id to next_story_node_id."""

    id: int
    story_node_id: int
    next_story_node_id: int
    text: str = ""
    health_effect: int | None = None
    audio_url: str | None = None
    order: int = 0  # GoForward picks the lowest (order, id)


class Character(BaseModel):
    """A speaker of dialogue lines."""

    id: int
    name: str
    description: str = ""
    image_url: str | None = None


# ---------------------------------------------------------------------------
# Mutable records
# ---------------------------------------------------------------------------

class PlayerCharacter(BaseModel):
    """The player's character. health mirrors the owning save's health."""

    id: int
    name: str
    user_id: int
    health: NonNegativeInt = 100
    current_story_node_id: int


class GameSave(BaseModel):
    """One playthrough: position in the graph, history, dialogue cursor, health."""

    id: int
    user_id: int
    player_character_id: int
    save_name: str = ""
    current_story_node_id: int
    visited_node_ids: list[int] = Field(default_factory=list)
    last_choice_id: int | None = None
    current_dialogue_index: NonNegativeInt = 0
    health: NonNegativeInt = 100
    last_update: datetime = Field(default_factory=utcnow)

    @field_validator("visited_node_ids")
    @classmethod
    def _no_consecutive_duplicates(cls, value: list[int]) -> list[int]:
        for prev, cur in zip(value, value[1:]):
            if prev == cur:
                raise ValueError(f"visited_node_ids repeats node {cur} consecutively")
        return value

    def touch(self) -> None:
        self.last_update = utcnow()
