"""Response views returned by the game services and the HTTP API.

Views serialise with camelCase aliases (backgroundUrl, nextStoryNodeId, ...)
and accept snake_case field names when constructed in Python.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from storyline import storage
from storyline.errors import NotFoundError
from storyline.models import Choice, Dialogue, GameSave, PlayerCharacter


class View(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DialogueView(View):
    id: int
    story_node_id: int
    order: int
    character_id: int | None = None
    character_name: str | None = None
    character_image_url: str | None = None
    text: str
    health_effect: int | None = None


class ChoiceView(View):
    id: int
    story_node_id: int
    next_story_node_id: int
    text: str
    health_effect: int | None = None
    audio_url: str | None = None


class NodeView(View):
    id: int
    title: str
    description: str
    background_url: str | None = None
    background_music_url: str | None = None
    ambient_sound_url: str | None = None
    dialogues: list[DialogueView]
    choices: list[ChoiceView]


class GameSaveView(View):
    id: int
    user_id: int
    player_character_id: int
    save_name: str
    current_story_node_id: int
    visited_node_ids: list[int]
    last_choice_id: int | None
    current_dialogue_index: int
    health: int
    last_update: datetime


class PlayerCharacterView(View):
    id: int
    name: str
    user_id: int
    health: int
    current_story_node_id: int


class GameStateView(View):
    save_id: int
    health: int
    player_character: PlayerCharacterView | None
    current_story_node: NodeView
    available_choices: list[ChoiceView]
    visited_node_ids: list[int]


def dialogue_view(dialogue: Dialogue) -> DialogueView:
    """Join a dialogue line with minimal info about its speaker."""
    speaker = storage.get_character(dialogue.character_id) if dialogue.character_id is not None else None
    return DialogueView(
        **dialogue.model_dump(),
        character_name=speaker.name if speaker else None,
        character_image_url=speaker.image_url if speaker else None,
    )


def choice_view(choice: Choice) -> ChoiceView:
    return ChoiceView(**choice.model_dump(exclude={"order"}))


def node_view(node_id: int) -> NodeView:
    node = storage.get_story_node(node_id)
    if node is None:
        raise NotFoundError("StoryNode", node_id)
    return NodeView(
        **node.model_dump(),
        dialogues=[dialogue_view(d) for d in storage.get_dialogues_in_node(node_id)],
        choices=[choice_view(c) for c in storage.get_choices_in_node(node_id)],
    )


def save_view(save: GameSave) -> GameSaveView:
    return GameSaveView(**save.model_dump())


def player_view(player: PlayerCharacter) -> PlayerCharacterView:
    return PlayerCharacterView(**player.model_dump())
