"""Tests for the navigation engine.

Test story graph (tests/presets/story):
  1 Start     -> 102 (order 1) -> 4, -15 health
              -> 101 (order 2) -> 2
  2 Hallway   -> 201 -> 3, +10 health
  3 Broken    -> 999 -> 77 (missing node)
  4 Loop Room -> 401 -> 4 (self-loop), 402 -> 1
  5 Far Room  -> 501 -> 1
  6 Closet    (no dialogue, no choices)
"""

import pytest

from storyline import choices, dialogue, navigation, storage
from storyline.errors import NotFoundError


def _reload(save_id: int):
    return storage.get_save(save_id)


def _save_file_text(save_id: int) -> str:
    return (storage.saves_dir() / f"{save_id}.json").read_text()


# ── Current node ─────────────────────────────────────────


def test_get_current_node(save):
    view = navigation.get_current_node(save.id)
    assert view.id == 1
    assert view.title == "Start"
    assert [d.id for d in view.dialogues] == [10, 11]
    assert [c.id for c in view.choices] == [102, 101]


def test_current_node_joins_speaker(save):
    first, second = navigation.get_current_node(save.id).dialogues
    assert first.character_name == "Guide"
    assert first.character_image_url == "/characters/guide.png"
    assert second.character_id is None
    assert second.character_name is None


def test_current_node_unknown_speaker(save):
    navigation.navigate_to_node(save.id, 4)
    line = navigation.get_current_node(save.id).dialogues[0]
    assert line.character_id == 99
    assert line.character_name is None


def test_get_current_node_is_idempotent_and_read_only(save):
    path = storage.saves_dir() / f"{save.id}.json"
    before_text = path.read_text()
    before_mtime = path.stat().st_mtime_ns
    assert navigation.get_current_node(save.id) == navigation.get_current_node(save.id)
    assert path.read_text() == before_text
    assert path.stat().st_mtime_ns == before_mtime


def test_get_current_node_missing_save():
    with pytest.raises(NotFoundError):
        navigation.get_current_node(999)


# ── Navigate ─────────────────────────────────────────────


def test_navigate_records_node_left(save):
    view = navigation.navigate_to_node(save.id, 2)
    assert view.id == 2
    s = _reload(save.id)
    assert s.current_story_node_id == 2
    assert s.visited_node_ids == [1]
    assert s.last_choice_id is None


def test_navigate_resets_dialogue_index(save):
    dialogue.get_next_dialogue(save.id)
    assert _reload(save.id).current_dialogue_index == 1
    navigation.navigate_to_node(save.id, 2)
    assert _reload(save.id).current_dialogue_index == 0


def test_navigate_stamps_last_update(save):
    navigation.navigate_to_node(save.id, 2)
    assert _reload(save.id).last_update >= save.last_update


def test_navigate_unknown_node_returns_none_and_leaves_save(save):
    before = _save_file_text(save.id)
    assert navigation.navigate_to_node(save.id, 404) is None
    assert _save_file_text(save.id) == before


def test_navigate_missing_save():
    with pytest.raises(NotFoundError):
        navigation.navigate_to_node(999, 2)


def test_navigate_to_current_node_does_not_duplicate_history(save):
    navigation.navigate_to_node(save.id, 2)
    navigation.navigate_to_node(save.id, 2)
    navigation.navigate_to_node(save.id, 2)
    assert _reload(save.id).visited_node_ids == [1, 2]


def test_history_never_repeats_consecutively(save):
    for node_id in [2, 2, 1, 1, 4, 4, 4, 1, 3, 3]:
        navigation.navigate_to_node(save.id, node_id)
    visited = _reload(save.id).visited_node_ids
    assert all(a != b for a, b in zip(visited, visited[1:]))
    assert visited == [1, 2, 1, 4, 1, 3]


def test_navigate_updates_player_mirror(save):
    navigation.navigate_to_node(save.id, 2)
    assert storage.get_player_character(save.player_character_id).current_story_node_id == 2


def test_raw_navigation_is_not_reversible(save):
    choices.make_choice(save.id, 101)
    navigation.navigate_to_node(save.id, 3)
    assert _reload(save.id).last_choice_id is None
    assert navigation.go_back(save.id) is None


# ── Back ─────────────────────────────────────────────────


def test_go_back_at_root_returns_none(save):
    before = _save_file_text(save.id)
    assert navigation.go_back(save.id) is None
    assert _save_file_text(save.id) == before


def test_go_back_after_choice(save):
    choices.make_choice(save.id, 101)
    view = navigation.go_back(save.id)
    assert view.id == 1
    s = _reload(save.id)
    assert s.current_story_node_id == 1
    assert s.last_choice_id is None
    assert s.visited_node_ids == [1]


def test_go_back_only_one_level(save):
    choices.make_choice(save.id, 101)
    choices.make_choice(save.id, 201)
    assert navigation.go_back(save.id).id == 2
    assert navigation.go_back(save.id) is None
    assert _reload(save.id).current_story_node_id == 2


def test_go_back_resets_dialogue_index(save):
    choices.make_choice(save.id, 101)
    dialogue.get_next_dialogue(save.id)
    navigation.go_back(save.id)
    assert _reload(save.id).current_dialogue_index == 0


def test_choose_again_after_go_back_keeps_history_clean(save):
    choices.make_choice(save.id, 101)
    navigation.go_back(save.id)
    choices.make_choice(save.id, 101)
    assert _reload(save.id).visited_node_ids == [1]


def test_go_back_missing_save():
    with pytest.raises(NotFoundError):
        navigation.go_back(999)


# ── Forward ──────────────────────────────────────────────


def test_go_forward_follows_lowest_order_choice(save):
    view = navigation.go_forward(save.id)
    assert view.id == 4
    s = _reload(save.id)
    assert s.last_choice_id == 102
    assert s.visited_node_ids == [1]


def test_go_forward_does_not_apply_health_effect(save):
    navigation.go_forward(save.id)
    assert _reload(save.id).health == 100


def test_go_forward_is_reversible(save):
    navigation.go_forward(save.id)
    assert navigation.go_back(save.id).id == 1


def test_go_forward_without_choices_returns_none(save):
    navigation.navigate_to_node(save.id, 6)
    before = _save_file_text(save.id)
    assert navigation.go_forward(save.id) is None
    assert _save_file_text(save.id) == before


def test_go_forward_to_missing_node_returns_none(save):
    navigation.navigate_to_node(save.id, 3)
    before = _save_file_text(save.id)
    assert navigation.go_forward(save.id) is None
    assert _save_file_text(save.id) == before


# ── History ──────────────────────────────────────────────


def test_visited_nodes(save):
    choices.make_choice(save.id, 101)
    choices.make_choice(save.id, 201)
    assert navigation.get_visited_nodes(save.id) == [1, 2]
    assert navigation.has_visited_node(save.id, 1) is True
    assert navigation.has_visited_node(save.id, 3) is False


def test_visited_nodes_missing_save():
    with pytest.raises(NotFoundError):
        navigation.get_visited_nodes(999)
    with pytest.raises(NotFoundError):
        navigation.has_visited_node(999, 1)
