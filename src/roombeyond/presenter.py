""" Plain text presentation of what the core reports.

The core never draws anything. This listens to the focus selector, dialog
engine, story and gamestate and writes what a player would see as lines of
text. Highlighting the focused object is just a line saying so.
"""

import sys
from typing import Optional, TextIO

from roombeyond import core, focus, dialog, dialog_engine, story, gamestate


class TextPresenter(focus.FocusObserver, dialog_engine.DialogObserver, story.StoryObserver, gamestate.GamestateObserver):
    def __init__(self, out:Optional[TextIO]=None, verbose:bool=False) -> None:
        super().__init__()
        self.out = out if out is not None else sys.stdout
        # proximity and flag chatter only shows up when verbose
        self.verbose = verbose

    def attach(self, gs:gamestate.Gamestate) -> None:
        gs.observe(self)
        gs.focus.observe(self)
        gs.dialogs.observe(self)
        gs.story.observe(self)

    def detach(self, gs:gamestate.Gamestate) -> None:
        gs.unobserve(self)
        gs.focus.unobserve(self)
        gs.dialogs.unobserve(self)
        gs.story.unobserve(self)

    def _write(self, line:str) -> None:
        self.out.write(line + "\n")

    def show_node(self, view:dialog_engine.NodeView) -> None:
        speaker = f'{view.speaker}: ' if view.speaker else ""
        self._write(f'{speaker}{view.text}')
        for choice in view.choices:
            self._write(f'  [{choice.index}] {choice.text}')
        if view.terminal:
            self._write("  (end)")

    # FocusObserver

    def proximity_entered(self, obj:core.InteractableObject) -> None:
        if self.verbose:
            self._write(f'near {obj.name}')

    def proximity_exited(self, obj:core.InteractableObject) -> None:
        if self.verbose:
            self._write(f'left {obj.name}')

    def focus_changed(self, previous:Optional[core.InteractableObject], current:Optional[core.InteractableObject]) -> None:
        if current is None:
            self._write("looking at nothing in particular")
        else:
            self._write(f'> {current.name}')

    # GamestateObserver

    def interaction_occurred(self, gs:gamestate.Gamestate, obj:core.InteractableObject) -> None:
        self._write(f'* {obj.name} ({obj.object_id})')

    def description_shown(self, gs:gamestate.Gamestate, obj:core.InteractableObject) -> None:
        self._write(obj.description)

    # DialogObserver

    def dialog_started(self, engine:dialog_engine.DialogEngine, view:dialog_engine.NodeView) -> None:
        self.show_node(view)

    def node_changed(self, engine:dialog_engine.DialogEngine, view:dialog_engine.NodeView, previous:dialog.DialogNode) -> None:
        self.show_node(view)

    def dialog_ended(self, engine:dialog_engine.DialogEngine, object_id:Optional[str]) -> None:
        self._write("---")

    # StoryObserver

    def flag_changed(self, st:story.Story, name:str, value:story.FlagValue) -> None:
        if self.verbose:
            self._write(f'flag {name} = {value!r}')

    def object_discovered(self, st:story.Story, object_id:str, total:int) -> None:
        self._write(f'discovered {object_id} ({total})')

    def act_changed(self, st:story.Story, previous:int, current:int) -> None:
        self._write(f'=== Act {current} ===')
