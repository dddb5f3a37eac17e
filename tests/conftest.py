import logging
from typing import Generator

import pytest

from roombeyond import core, config, dialog, story, gamestate
from . import RecordingObserver, TEST_ROOM, room_position

# some logging to turn on if we like
#logging.getLogger("roombeyond.dialog_engine").level = logging.DEBUG
#logging.getLogger("roombeyond.story").level = logging.DEBUG

@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    yield
    # tests are free to load overrides, put the built-in config back
    config.load_config()
    config.load_dialogs()

@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()

@pytest.fixture
def registry() -> core.ObjectRegistry:
    return core.ObjectRegistry([core.InteractableObject(x, room_position(x)) for x in TEST_ROOM])

@pytest.fixture
def graphs() -> dict[str, dialog.DialogGraph]:
    return dialog.load_dialogs()

@pytest.fixture
def story_machine() -> story.Story:
    return story.Story()

@pytest.fixture
def game(registry:core.ObjectRegistry, graphs:dict[str, dialog.DialogGraph]) -> gamestate.Gamestate:
    return gamestate.Gamestate(registry, graphs)
