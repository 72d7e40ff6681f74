"""Create demo saves for development/testing."""

import shutil

from storyline import choices, dialogue, sessions, storage

DEMO_USER_ID = 1

# (save name, number of first-choices to take from the start node)
DEMO_SAVES = [
    ("Fresh Start", 0),
    ("Past the Airlock", 1),
    ("Deep Run", 3),
]


def create_demo_data() -> None:
    """Wipe existing saves/player characters and create fresh demo saves."""
    for directory in (storage.saves_dir(), storage.players_dir()):
        if directory.exists():
            shutil.rmtree(directory)
        directory.mkdir(parents=True, exist_ok=True)

    for name, steps in DEMO_SAVES:
        save = sessions.create_game(DEMO_USER_ID, name)
        for _ in range(steps):
            available = choices.get_available_choices(save.id)
            if not available:
                break
            dialogue.skip_to_last_dialogue(save.id)
            choices.make_choice(save.id, available[0].id)
