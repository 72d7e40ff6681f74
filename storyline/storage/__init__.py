"""File-based JSON storage.

Data layout:
  data/
    saves/<id>.json              GameSave records (mutable)
    player-characters/<id>.json  PlayerCharacter records (mutable)
    config.json                  Game settings (start node, starting health, player name)
  presets/
    story/                       Read-only story graph (nodes, dialogues, choices, characters)

Ids are integers allocated as max(existing) + 1.

Writes to saves and player characters made inside a unit of work
(transaction() / @transactional) are staged and only reach disk on commit.
Outside a unit they are written immediately.

Config: get_config() returns defaults merged with stored values.
update_config() overwrites known keys only.
"""

# Re-export all public symbols so `from storyline import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    players_dir,
    presets_dir,
    saves_dir,
    story_dir,
)

from .transaction import (  # noqa: F401
    UnitOfWork,
    begin,
    commit,
    current_unit,
    rollback,
    transaction,
    transactional,
)

from .story import (  # noqa: F401
    StoryGraph,
    get_character,
    get_choice,
    get_choices_in_node,
    get_dialogues_in_node,
    get_story_node,
    load_story_graph,
    story_node_exists,
)

from .saves import (  # noqa: F401
    delete_save,
    find_save_by_player,
    get_save,
    list_saves,
    next_save_id,
    put_save,
)

from .players import (  # noqa: F401
    delete_player_character,
    get_player_character,
    next_player_id,
    put_player_character,
)

from .config import (  # noqa: F401
    get_config,
    update_config,
)
