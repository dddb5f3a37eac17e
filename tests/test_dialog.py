import io

import pytest

from roombeyond import config, dialog, predicates
from . import node, graph

def room_ids():
    return [x["id"] for x in config.Settings.room.objects]

def test_shipped_dialogs_hold_together(graphs):
    errors = []
    for g in graphs.values():
        errors.extend(x for x in dialog.validate_dialog(g, room_ids()) if x.error)
    assert errors == []

def test_shipped_dialogs_cover_the_room(graphs):
    ids = room_ids()
    for dialog_id, g in graphs.items():
        assert dialog_id in ids
        assert g.root_id == f'{dialog_id}_start'
        assert g.root_id in g.nodes

    # everything but the photo talks
    assert set(ids) - set(graphs.keys()) == {"photo"}

def test_every_choice_target_resolves(graphs):
    for g in graphs.values():
        for n in g.nodes.values():
            for choice in n.choices:
                assert choice.node_id in g.nodes, f'{g.dialog_id}:{n.node_id} -> {choice.node_id}'

def test_load_dialog_from_config():
    g = dialog.load_dialog("phone")
    start = g.nodes["phone_start"]
    assert start.speaker == "Inner Voice"
    assert len(start.choices) == 3
    assert not start.terminal
    assert g.nodes["phone_missed"].flags == ["phone_dead"]
    assert g.nodes["phone_missed"].terminal

def test_gated_choice_condition():
    g = dialog.load_dialog("chair")
    gated = g.nodes["chair_start"].choices[3]
    assert gated.condition == "act1_complete"
    assert isinstance(gated.criteria, predicates.FlagCriteria)

def test_load_rejects_malformed_nodes():
    with pytest.raises(ValueError):
        dialog.load_dialog_node({"text": "no id"})
    with pytest.raises(ValueError):
        dialog.load_dialog_node({"node_id": "x", "text": "bad choice", "choices": [{"text": "where to?"}]})
    with pytest.raises(ValueError):
        dialog.load_dialog("dup", {"nodes": [
            {"node_id": "dup_start", "text": "one"},
            {"node_id": "dup_start", "text": "two"},
        ]})

def test_load_dialogs_override():
    config.load_dialogs(io.StringIO("""
[lamp]
[[lamp.nodes]]
node_id = "lamp_start"
text = "a lamp"
"""))
    graphs = dialog.load_dialogs()
    assert list(graphs.keys()) == ["lamp"]
    assert graphs["lamp"].nodes["lamp_start"].terminal

def test_load_condition():
    assert isinstance(predicates.load_condition(None), predicates.Literal)
    assert isinstance(predicates.load_condition(""), predicates.Literal)

    visited = predicates.load_condition("visited:somewhere")
    assert isinstance(visited, predicates.VisitedCriteria)
    assert visited.node_id == "somewhere"

    flag = predicates.load_condition("has_key")
    assert isinstance(flag, predicates.FlagCriteria)
    assert flag.flag == "has_key"

def test_validate_finds_problems():
    g = graph("lamp", "lamp_start",
        node("lamp_start", ("on", "lamp_on", None), ("off", "lamp_gone", None), ("again", "lamp_on", "visited:lamp_nowhere")),
        node("lamp_on"),
        node("lamp_orphan"),
    )
    issues = dialog.validate_dialog(g, ["desk"])

    errors = [(x.node_id, x.message) for x in issues if x.error]
    warnings = [(x.node_id, x.message) for x in issues if not x.error]

    assert len(errors) == 2
    assert all(node_id == "lamp_start" for node_id, _ in errors)
    assert any("lamp_gone" in msg for _, msg in errors)
    assert any("visited:lamp_nowhere" in msg for _, msg in errors)

    assert (None, "no object in the room has this id") in warnings
    assert ("lamp_orphan", "not reachable from the start node") in warnings

def test_validate_missing_start():
    g = graph("lamp", "lamp_start", node("lamp_on"))
    issues = dialog.validate_dialog(g)
    assert [str(x) for x in issues if x.error] == ["ERROR lamp: missing start node lamp_start"]

def test_issue_str():
    assert str(dialog.DialogIssue("phone", "phone_start", "oops")) == "ERROR phone:phone_start: oops"
    assert str(dialog.DialogIssue("phone", None, "hmm", error=False)) == "WARNING phone: hmm"
