""" Runs one dialog at a time over the per-object dialog graphs.

The engine is either inactive or active at some node of the current object's
graph. start puts it at the object's start node, select_choice follows one of
the currently available choices and end drops the session.

Choices are filtered by their conditions every time they're asked for:
"visited:<node_id>" checks this session's history, anything else is a story
flag looked up through the flag checker. With no flag checker flag conditions
are false.

Bad input (a choice index that isn't available, selecting with no active
dialog) and bad content (no graph, no start node, a choice pointing nowhere)
are logged and ignored, nothing here raises on them.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, NamedTuple, Optional, TypedDict, NotRequired

from roombeyond import core, util, predicates, dialog


class ChoiceView(NamedTuple):
    index: int
    text: str


class NodeView(NamedTuple):
    """ what the presentation layer needs to show the current node """
    object_id: str
    node_id: str
    speaker: Optional[str]
    text: str
    choices: list[ChoiceView]

    @property
    def terminal(self) -> bool:
        return len(self.choices) == 0


class DialogObserver(core.Observer):
    def dialog_started(self, engine:"DialogEngine", view:NodeView) -> None:
        pass

    def node_changed(self, engine:"DialogEngine", view:NodeView, previous:dialog.DialogNode) -> None:
        pass

    def dialog_ended(self, engine:"DialogEngine", object_id:Optional[str]) -> None:
        pass


class DialogState(TypedDict):
    currentNodeId: Optional[str]
    history: list[str]
    isActive: bool
    objectId: NotRequired[Optional[str]]


class DialogSession:
    def __init__(self) -> None:
        self.object_id:Optional[str] = None
        self.current_node_id:Optional[str] = None
        # first visit order, each node at most once
        self.history:list[str] = []
        self.active = False

    def visit(self, node_id:str) -> None:
        self.current_node_id = node_id
        if node_id not in self.history:
            self.history.append(node_id)

    def reset(self) -> None:
        self.object_id = None
        self.current_node_id = None
        self.history = []
        self.active = False


class DialogEngine(core.Observable[DialogObserver], predicates.ConditionScope):
    def __init__(self, graphs:Mapping[str, dialog.DialogGraph], *args:Any, flag_checker:Optional[Callable[[str], bool]]=None, **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self.logger = logging.getLogger(util.fullname(self))
        self.graphs = graphs
        self.flag_checker = flag_checker
        self.session = DialogSession()

    def set_flag_checker(self, flag_checker:Optional[Callable[[str], bool]]) -> None:
        self.flag_checker = flag_checker

    # ConditionScope

    def has_visited(self, node_id:str) -> bool:
        return node_id in self.session.history

    def check_flag(self, flag:str) -> bool:
        if self.flag_checker is None:
            return False
        return bool(self.flag_checker(flag))

    # queries

    def is_active(self) -> bool:
        return self.session.active

    @property
    def current_object_id(self) -> Optional[str]:
        return self.session.object_id

    @property
    def history(self) -> list[str]:
        return list(self.session.history)

    @property
    def graph(self) -> Optional[dialog.DialogGraph]:
        if self.session.object_id is None:
            return None
        return self.graphs.get(self.session.object_id)

    def current_node(self) -> Optional[dialog.DialogNode]:
        graph = self.graph
        if graph is None or self.session.current_node_id is None:
            return None
        return graph.get(self.session.current_node_id)

    def get_available_choices(self) -> list[dialog.DialogChoice]:
        node = self.current_node()
        if node is None:
            return []
        return [x for x in node.choices if x.criteria.evaluate(self)]

    def view(self) -> Optional[NodeView]:
        node = self.current_node()
        if node is None or self.session.object_id is None:
            return None
        return NodeView(
            self.session.object_id,
            node.node_id,
            node.speaker,
            node.text,
            [ChoiceView(i, x.text) for i, x in enumerate(self.get_available_choices())],
        )

    # transitions

    def start(self, object_id:str) -> bool:
        """ starts the dialog for object_id at its start node

        returns False, leaving things as they were, if there's no graph or no
        start node for object_id. Starting while another dialog is active ends
        that one first. """

        graph = self.graphs.get(object_id)
        if graph is None:
            self.logger.warning(f'no dialog for {object_id}')
            return False
        if graph.root_id not in graph.nodes:
            self.logger.warning(f'dialog {object_id} has no start node {graph.root_id}')
            return False

        if self.session.active:
            self.end()

        self.session.reset()
        self.session.object_id = object_id
        self.session.active = True
        self.session.visit(graph.root_id)
        self.logger.debug(f'started dialog {object_id}')

        view = self.view()
        assert view is not None
        for observer in self._notify():
            observer.dialog_started(self, view)
        return True

    def select_choice(self, index:int) -> bool:
        """ follows the index-th available choice, returns True iff we moved """

        if not self.session.active:
            self.logger.debug(f'ignoring choice {index} with no active dialog')
            return False

        previous = self.current_node()
        graph = self.graph
        if previous is None or graph is None:
            return False

        available = self.get_available_choices()
        if index < 0 or index >= len(available):
            self.logger.debug(f'ignoring choice {index}, {len(available)} available at {previous.node_id}')
            return False

        choice = available[index]
        if choice.node_id not in graph.nodes:
            self.logger.warning(f'choice "{choice.text}" at {previous.node_id} in dialog {graph.dialog_id} targets missing node {choice.node_id}')
            return False

        self.session.visit(choice.node_id)
        self.logger.debug(f'{previous.node_id} -> {choice.node_id}')

        view = self.view()
        assert view is not None
        for observer in self._notify():
            observer.node_changed(self, view, previous)
        return True

    def end(self) -> None:
        """ drops the current dialog, if any. safe to call any time. """

        if not self.session.active:
            return

        object_id = self.session.object_id
        self.session.reset()
        self.logger.debug(f'ended dialog {object_id}')
        for observer in self._notify():
            observer.dialog_ended(self, object_id)

    # save/restore

    def export_state(self) -> DialogState:
        return {
            "currentNodeId": self.session.current_node_id,
            "history": list(self.session.history),
            "isActive": self.session.active,
            "objectId": self.session.object_id,
        }

    def import_state(self, state:DialogState) -> None:
        """ restores exactly what export_state gave, no notifications

        objectId is optional, without it we look for the graph holding
        currentNodeId. """

        object_id = state.get("objectId")
        current_node_id = state["currentNodeId"]
        if object_id is None and current_node_id is not None:
            object_id = self._find_graph(current_node_id)
            if object_id is None:
                self.logger.warning(f'restored dialog node {current_node_id} is not in any dialog')

        self.session.object_id = object_id
        self.session.current_node_id = current_node_id
        self.session.history = list(state["history"])
        self.session.active = state["isActive"]

    def _find_graph(self, node_id:str) -> Optional[str]:
        for dialog_id, graph in self.graphs.items():
            if node_id in graph.nodes:
                return dialog_id
        return None
