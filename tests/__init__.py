from typing import Any, Optional

from roombeyond import core, focus, dialog, dialog_engine, story, gamestate

class RecordingObserver(focus.FocusObserver, dialog_engine.DialogObserver, story.StoryObserver, gamestate.GamestateObserver):
    """ Observes anything and remembers what it heard, in order. """

    def __init__(self, *args:Any, **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self.events:list[tuple[Any, ...]] = []

    @property
    def names(self) -> list[str]:
        return [x[0] for x in self.events]

    def of(self, name:str) -> list[tuple[Any, ...]]:
        return [x[1:] for x in self.events if x[0] == name]

    def proximity_entered(self, obj:core.InteractableObject) -> None:
        self.events.append(("proximity_entered", obj.object_id))

    def proximity_exited(self, obj:core.InteractableObject) -> None:
        self.events.append(("proximity_exited", obj.object_id))

    def focus_changed(self, previous:Optional[core.InteractableObject], current:Optional[core.InteractableObject]) -> None:
        self.events.append((
            "focus_changed",
            previous.object_id if previous else None,
            current.object_id if current else None,
        ))

    def dialog_started(self, engine:dialog_engine.DialogEngine, view:dialog_engine.NodeView) -> None:
        self.events.append(("dialog_started", view.node_id, [x.text for x in view.choices]))

    def node_changed(self, engine:dialog_engine.DialogEngine, view:dialog_engine.NodeView, previous:dialog.DialogNode) -> None:
        self.events.append(("node_changed", view.node_id, previous.node_id))

    def dialog_ended(self, engine:dialog_engine.DialogEngine, object_id:Optional[str]) -> None:
        self.events.append(("dialog_ended", object_id))

    def flag_changed(self, st:story.Story, name:str, value:story.FlagValue) -> None:
        self.events.append(("flag_changed", name, value))

    def object_discovered(self, st:story.Story, object_id:str, total:int) -> None:
        self.events.append(("object_discovered", object_id, total))

    def act_changed(self, st:story.Story, previous:int, current:int) -> None:
        self.events.append(("act_changed", previous, current))

    def interaction_occurred(self, gs:gamestate.Gamestate, obj:core.InteractableObject) -> None:
        self.events.append(("interaction_occurred", obj.object_id, obj.name))

    def description_shown(self, gs:gamestate.Gamestate, obj:core.InteractableObject) -> None:
        self.events.append(("description_shown", obj.object_id))

def node(node_id:str, *choices:tuple[str, str, Optional[str]], flags:tuple[str, ...]=()) -> dialog.DialogNode:
    return dialog.DialogNode(node_id, f'{node_id} text', [dialog.DialogChoice(t, n, c) for t, n, c in choices], flags=flags)

def graph(dialog_id:str, root_id:str, *nodes:dialog.DialogNode) -> dialog.DialogGraph:
    return dialog.DialogGraph(dialog_id, root_id, nodes)

EYE_HEIGHT = 1.6
# far enough apart that standing in front of one puts nothing else nearby
SPACING = 10.

# objects along the x axis, each 2 units in front (-z) of a player standing at
# (i*SPACING, EYE_HEIGHT, 0)
TEST_ROOM = ["phone", "laptop", "chair", "photo", "vr_headset", "bed"]

def room_position(object_id:str) -> tuple[float, float, float]:
    return (TEST_ROOM.index(object_id) * SPACING, EYE_HEIGHT, -2.)

def standing_at(object_id:str) -> tuple[float, float, float]:
    return (TEST_ROOM.index(object_id) * SPACING, EYE_HEIGHT, 0.)

LOOKING_AHEAD = (0., 0., -1.)

def look_at(gs:gamestate.Gamestate, object_id:str) -> Optional[str]:
    """ walks up to object_id in the test room and ticks """
    position = standing_at(object_id)
    return gs.tick(focus.CameraPose(position, LOOKING_AHEAD), position)
