""" The one object that owns everything about a running game.

Components don't reach for each other through globals, they get handed what
they need here. Gamestate also turns an "interact" press into dialog and story
changes and applies flags that dialog content declares.
"""

import logging
from typing import Any, Optional, TypedDict

from roombeyond import core, util, config, focus, dialog, dialog_engine, story


class GamestateObserver(core.Observer):
    def interaction_occurred(self, gamestate:"Gamestate", obj:core.InteractableObject) -> None:
        pass

    def description_shown(self, gamestate:"Gamestate", obj:core.InteractableObject) -> None:
        """ obj was interacted with but has no dialog to show """
        pass


class GameState(TypedDict):
    dialog: dialog_engine.DialogState
    story: story.StoryState
    examined: list[str]


class Gamestate(core.Observable[GamestateObserver], dialog_engine.DialogObserver):
    def __init__(
            self,
            registry:core.ObjectRegistry,
            graphs:dict[str, dialog.DialogGraph],
            *args:Any,
            focus_selector:Optional[focus.FocusSelector]=None,
            story_machine:Optional[story.Story]=None,
            examine_flags:Optional[dict[str, str]]=None,
            **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self.logger = logging.getLogger(util.fullname(self))

        self.registry = registry
        self.focus = focus_selector if focus_selector is not None else focus.FocusSelector(registry)
        self.story = story_machine if story_machine is not None else story.Story()
        self.dialogs = dialog_engine.DialogEngine(graphs, flag_checker=self.story.check_flag)
        self.dialogs.observe(self)

        if examine_flags is None:
            examine_flags = dict(vars(config.Settings.story.EXAMINE_FLAGS))
        self.examine_flags = examine_flags

    @staticmethod
    def from_config() -> "Gamestate":
        """ builds the room described by config.Settings with config.Dialogs """
        registry = core.ObjectRegistry(core.load_objects(config.Settings.room.objects))
        return Gamestate(registry, dialog.load_dialogs())

    # DialogObserver

    def dialog_started(self, engine:dialog_engine.DialogEngine, view:dialog_engine.NodeView) -> None:
        self._apply_node_flags(engine, view.node_id)

    def node_changed(self, engine:dialog_engine.DialogEngine, view:dialog_engine.NodeView, previous:dialog.DialogNode) -> None:
        self._apply_node_flags(engine, view.node_id)

    def _apply_node_flags(self, engine:dialog_engine.DialogEngine, node_id:str) -> None:
        graph = engine.graph
        assert graph is not None
        node = graph.nodes[node_id]
        for flag in node.flags:
            self._raise_flag(flag)

    def _raise_flag(self, flag:str) -> None:
        # re-raising an already true flag would only spam flag_changed
        if self.story.get_flag(flag) is not True:
            self.story.set_flag(flag, True)

    # per frame

    def tick(self, camera_pose:focus.CameraPose, player_position:util.Vec3Like) -> Optional[str]:
        """ proximity first, then focus. returns the focused id, if any. """
        self.focus.update_proximity(player_position)
        self.focus.update_focus(camera_pose, player_position)
        return self.focus.get_focused()

    # player actions

    def interact(self) -> bool:
        """ acts on the focused object, returns True iff something happened

        ignored while a dialog is open or when nothing is in focus. """

        if self.dialogs.is_active():
            self.logger.debug("ignoring interact during dialog")
            return False

        obj = self.focus.focused_object
        if obj is None:
            self.logger.debug("ignoring interact with nothing in focus")
            return False

        obj.examined = True

        self.logger.debug(f'interacting with {obj}')
        for observer in self._notify():
            observer.interaction_occurred(self, obj)

        if not self.dialogs.start(obj.object_id):
            for observer in self._notify():
                observer.description_shown(self, obj)

        self._raise_flag(f'{obj.object_id}_examined')
        if obj.object_id in self.examine_flags:
            self._raise_flag(self.examine_flags[obj.object_id])
        self.story.discover_object(obj.object_id)

        return True

    def select_choice(self, index:int) -> bool:
        available = self.dialogs.get_available_choices()
        if not self.dialogs.select_choice(index):
            return False
        for flag in available[index].flags:
            self._raise_flag(flag)
        return True

    def end_dialog(self) -> None:
        self.dialogs.end()

    def advance_act(self) -> bool:
        """ moves to the next act if the current one is complete """
        if not self.story.can_progress_to_next_act():
            return False
        self.story.transition_to_act(self.story.current_act + 1)
        return True

    # save/restore

    def export_state(self) -> GameState:
        return {
            "dialog": self.dialogs.export_state(),
            "story": self.story.export_state(),
            "examined": [x.object_id for x in self.registry if x.examined],
        }

    def import_state(self, state:GameState) -> None:
        """ restores a snapshot. focus and proximity are recomputed next tick. """
        self.dialogs.import_state(state["dialog"])
        self.story.import_state(state["story"])
        examined = set(state.get("examined", []))
        for obj in self.registry:
            obj.examined = obj.object_id in examined
