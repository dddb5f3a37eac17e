""" Dialog graphs for Room Beyond

Each interactable object can have a dialog graph, a set of nodes keyed by
node_id with choices leading from node to node. A graph starts at
"<object_id>_start". Nodes with no choices are dead ends, the player can only
dismiss the dialog there.

Content lives in data/dialogs.toml (see config.Dialogs). validate_dialog is the
offline check that a graph hangs together, the runtime doesn't check.
"""

import logging
from typing import Sequence, Mapping, Any, Optional, NamedTuple

from roombeyond import config, predicates

logger = logging.getLogger(__name__)


class DialogChoice:
    def __init__(self, text:str, node_id:str, condition:Optional[str]=None, flags:Sequence[str]=()) -> None:
        self.text = text
        self.node_id = node_id
        self.condition = condition
        self.criteria = predicates.load_condition(condition)
        self.flags = flags

    def __repr__(self) -> str:
        return f'DialogChoice({self.text!r}, {self.node_id!r}, condition={self.condition!r})'


class DialogNode:
    def __init__(self, node_id:str, text:str, choices:Sequence[DialogChoice], speaker:Optional[str]=None, flags:Sequence[str]=()) -> None:
        self.node_id = node_id
        self.text = text
        self.choices = choices
        self.speaker = speaker
        self.flags = flags

    @property
    def terminal(self) -> bool:
        return len(self.choices) == 0

    def __repr__(self) -> str:
        return f'DialogNode({self.node_id!r}, choices={len(self.choices)})'


class DialogGraph:
    def __init__(self, dialog_id:str, root_id:str, nodes:Sequence[DialogNode]):
        self.dialog_id = dialog_id
        self.root_id = root_id
        self.nodes:dict[str, DialogNode] = {}
        for node in nodes:
            if node.node_id in self.nodes:
                raise ValueError(f'duplicate node {node.node_id} in dialog {dialog_id}')
            self.nodes[node.node_id] = node

    def get(self, node_id:str) -> Optional[DialogNode]:
        return self.nodes.get(node_id)


def start_node_id(dialog_id:str) -> str:
    return f'{dialog_id}{config.Settings.dialog.START_NODE_SUFFIX}'


def load_dialog_choice(choice_data:Mapping[str, Any]) -> DialogChoice:
    if "text" not in choice_data or "node_id" not in choice_data:
        raise ValueError(f'dialog choice needs text and node_id, got {dict(choice_data)}')
    return DialogChoice(
        choice_data["text"],
        choice_data["node_id"],
        choice_data.get("condition"),
        choice_data.get("flags", []),
    )


def load_dialog_node(dialog_data:Mapping[str, Any]) -> DialogNode:
    if "node_id" not in dialog_data or "text" not in dialog_data:
        raise ValueError(f'dialog node needs node_id and text, got keys {list(dialog_data.keys())}')
    return DialogNode(
        dialog_data["node_id"],
        dialog_data["text"],
        [load_dialog_choice(x) for x in dialog_data.get("choices", [])],
        dialog_data.get("speaker"),
        dialog_data.get("flags", []),
    )


def load_dialog(dialog_id:str, dialog_data:Optional[Mapping[str, Any]]=None) -> DialogGraph:
    if dialog_data is None:
        dialog_data = config.Dialogs[dialog_id]

    return DialogGraph(
        dialog_id,
        start_node_id(dialog_id),
        [load_dialog_node(x) for x in dialog_data.get("nodes", [])],
    )


def load_dialogs(dialogs:Optional[Mapping[str, Any]]=None) -> dict[str, DialogGraph]:
    """ loads every dialog graph, keyed by object id """
    if dialogs is None:
        dialogs = config.Dialogs
    graphs = {dialog_id: load_dialog(dialog_id, dialog_data) for dialog_id, dialog_data in dialogs.items()}
    logger.debug(f'loaded {len(graphs)} dialog graphs')
    return graphs


class DialogIssue(NamedTuple):
    dialog_id: str
    node_id: Optional[str]
    message: str
    # errors break traversal, warnings are just suspicious
    error: bool = True

    def __str__(self) -> str:
        level = "ERROR" if self.error else "WARNING"
        where = f'{self.dialog_id}:{self.node_id}' if self.node_id else self.dialog_id
        return f'{level} {where}: {self.message}'


def validate_dialog(graph:DialogGraph, object_ids:Optional[Sequence[str]]=None) -> list[DialogIssue]:
    """ Checks a dialog graph for authoring mistakes.

    errors: missing start node, choices pointing at nodes not in the graph,
    visited: conditions naming nodes not in the graph.
    warnings: nodes not reachable from the start node, graphs for objects that
    aren't in object_ids (if given).
    """

    issues:list[DialogIssue] = []

    if object_ids is not None and graph.dialog_id not in object_ids:
        issues.append(DialogIssue(graph.dialog_id, None, "no object in the room has this id", error=False))

    if graph.root_id not in graph.nodes:
        issues.append(DialogIssue(graph.dialog_id, None, f'missing start node {graph.root_id}'))

    for node in graph.nodes.values():
        for i, choice in enumerate(node.choices):
            if choice.node_id not in graph.nodes:
                issues.append(DialogIssue(graph.dialog_id, node.node_id, f'choice {i} "{choice.text}" targets missing node {choice.node_id}'))
            if isinstance(choice.criteria, predicates.VisitedCriteria) and choice.criteria.node_id not in graph.nodes:
                issues.append(DialogIssue(graph.dialog_id, node.node_id, f'choice {i} condition "{choice.condition}" names missing node'))

    if graph.root_id in graph.nodes:
        reachable = {graph.root_id}
        frontier = [graph.root_id]
        while frontier:
            node = graph.nodes[frontier.pop()]
            for choice in node.choices:
                if choice.node_id in graph.nodes and choice.node_id not in reachable:
                    reachable.add(choice.node_id)
                    frontier.append(choice.node_id)
        for node_id in graph.nodes:
            if node_id not in reachable:
                issues.append(DialogIssue(graph.dialog_id, node_id, "not reachable from the start node", error=False))

    return issues
