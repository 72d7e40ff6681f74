"""Read-only story graph, loaded from the presets directory.

    presets/story/
      story-nodes.json   list of StoryNode
      dialogues.json     list of Dialogue
      choices.json       list of Choice
      characters.json    list of Character

The graph is parsed once and cached until init_storage() runs again.
Missing files are treated as empty lists.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from storyline.models import Character, Choice, Dialogue, StoryNode

from .core import story_dir

logger = logging.getLogger(__name__)


@dataclass
class StoryGraph:
    nodes: dict[int, StoryNode] = field(default_factory=dict)
    dialogues: dict[int, Dialogue] = field(default_factory=dict)
    choices: dict[int, Choice] = field(default_factory=dict)
    characters: dict[int, Character] = field(default_factory=dict)


_graph: StoryGraph | None = None


def _load_list(path: Path) -> list[dict[str, Any]]:
    if not path.is_file():
        return []
    return json.loads(path.read_text())


def load_story_graph() -> StoryGraph:
    global _graph
    if _graph is not None:
        return _graph

    base = story_dir()
    graph = StoryGraph()
    for raw in _load_list(base / "story-nodes.json"):
        node = StoryNode.model_validate(raw)
        graph.nodes[node.id] = node
    for raw in _load_list(base / "dialogues.json"):
        dialogue = Dialogue.model_validate(raw)
        graph.dialogues[dialogue.id] = dialogue
    for raw in _load_list(base / "choices.json"):
        choice = Choice.model_validate(raw)
        graph.choices[choice.id] = choice
    for raw in _load_list(base / "characters.json"):
        character = Character.model_validate(raw)
        graph.characters[character.id] = character

    dangling = [
        c.id for c in graph.choices.values()
        if c.story_node_id not in graph.nodes or c.next_story_node_id not in graph.nodes
    ]
    if dangling:
        logger.warning("Choices referencing unknown story nodes: %s", dangling)

    logger.debug(
        "Loaded story graph from %s: %d nodes, %d dialogues, %d choices",
        base, len(graph.nodes), len(graph.dialogues), len(graph.choices),
    )
    _graph = graph
    return _graph


def get_story_node(node_id: int) -> StoryNode | None:
    return load_story_graph().nodes.get(node_id)


def story_node_exists(node_id: int) -> bool:
    return node_id in load_story_graph().nodes


def get_choice(choice_id: int) -> Choice | None:
    return load_story_graph().choices.get(choice_id)


def get_character(character_id: int) -> Character | None:
    return load_story_graph().characters.get(character_id)


def get_dialogues_in_node(node_id: int) -> list[Dialogue]:
    """Dialogue lines of a node, sorted by order (ties by id)."""
    lines = [d for d in load_story_graph().dialogues.values() if d.story_node_id == node_id]
    return sorted(lines, key=lambda d: (d.order, d.id))


def get_choices_in_node(node_id: int) -> list[Choice]:
    """Outgoing choices of a node, sorted by (order, id)."""
    edges = [c for c in load_story_graph().choices.values() if c.story_node_id == node_id]
    return sorted(edges, key=lambda c: (c.order, c.id))
