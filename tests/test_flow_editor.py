"""Tests for the in-memory flow editor."""
from unittest.mock import patch

from omniconsole.services.flow_editor import FlowEditor, edge_id_for


def test_add_node_uses_palette_label():
    editor = FlowEditor()

    node = editor.add_node("smsNode", {"x": 10, "y": 20})

    assert node == {
        "id": "smsNode-1",
        "type": "smsNode",
        "position": {"x": 10, "y": 20},
        "data": {"label": "SMS", "content": ""},
    }
    assert editor.nodes == [node]


def test_add_node_with_explicit_label_and_unknown_type():
    editor = FlowEditor()

    named = editor.add_node("smsNode", {"x": 0, "y": 0}, label="Reminder")
    unknown = editor.add_node("faxNode", {"x": 0, "y": 0})

    assert named["data"]["label"] == "Reminder"
    assert unknown["data"]["label"] == "faxNode"
    assert unknown["id"] == "faxNode-2"


def test_ids_can_collide_after_delete():
    editor = FlowEditor()
    editor.add_node("smsNode", {"x": 0, "y": 0})
    second = editor.add_node("smsNode", {"x": 0, "y": 0})
    editor.remove_node("smsNode-1")

    third = editor.add_node("smsNode", {"x": 5, "y": 5})

    assert third["id"] == second["id"] == "smsNode-2"


def test_add_node_at_random():
    editor = FlowEditor()

    with patch("omniconsole.services.flow_editor.random.random", side_effect=[0.5, 0.25]):
        node = editor.add_node_at_random("sms")

    assert node["id"] == "sms-1"
    assert node["type"] == "smsNode"
    assert node["position"] == {"x": 150.0, "y": 75.0}
    assert node["data"] == {"label": "Sms Node", "content": ""}


def test_random_positions_stay_in_range():
    editor = FlowEditor()
    for _ in range(20):
        node = editor.add_node_at_random("wait")
        assert 0 <= node["position"]["x"] < 300
        assert 0 <= node["position"]["y"] < 300


def test_project_uses_bounds_and_viewport():
    editor = FlowEditor(viewport={"x": 100, "y": 50, "zoom": 2})

    assert editor.project(420, 270, bounds_left=20, bounds_top=20) == {"x": 150.0, "y": 100.0}
    assert FlowEditor().project(30, 40) == {"x": 30.0, "y": 40.0}


def test_connect_adds_styled_edge():
    editor = FlowEditor()
    editor.add_node("webhookNode", {"x": 0, "y": 0})
    editor.add_node("smsNode", {"x": 0, "y": 100})

    edge = editor.connect("webhookNode-1", "smsNode-2", "a")

    assert edge["id"] == "reactflow__edge-webhookNode-1a-smsNode-2"
    assert edge["type"] == "smoothstep"
    assert edge["animated"] is True
    assert edge["markerEnd"] == {"type": "arrowclosed"}
    assert edge["style"]["strokeDasharray"] == "5 5"


def test_connect_ignores_duplicates_but_allows_any_pair():
    editor = FlowEditor()
    editor.add_node("stopNode", {"x": 0, "y": 0})
    editor.add_node("smsNode", {"x": 0, "y": 100})

    # A stop node has no outputs but the editor does not police that
    first = editor.connect("stopNode-1", "smsNode-2")
    duplicate = editor.connect("stopNode-1", "smsNode-2")

    assert first is not None
    assert duplicate is None
    assert len(editor.edges) == 1


def test_remove_node_cascades_edges():
    editor = FlowEditor()
    for node_type in ("webhookNode", "smsNode", "stopNode"):
        editor.add_node(node_type, {"x": 0, "y": 0})
    editor.connect("webhookNode-1", "smsNode-2", "a")
    editor.connect("smsNode-2", "stopNode-3", "a")

    assert editor.remove_node("smsNode-2")
    assert editor.edges == []
    assert [node["id"] for node in editor.nodes] == ["webhookNode-1", "stopNode-3"]
    assert not editor.remove_node("smsNode-2")


def test_remove_edge():
    editor = FlowEditor()
    editor.add_node("smsNode", {"x": 0, "y": 0})
    editor.add_node("stopNode", {"x": 0, "y": 0})
    editor.connect("smsNode-1", "stopNode-2", "a")

    assert editor.remove_edge(edge_id_for("smsNode-1", "stopNode-2", "a"))
    assert editor.edges == []
    assert not editor.remove_edge("missing")


def test_snapshot_is_a_copy():
    editor = FlowEditor()
    editor.add_node("smsNode", {"x": 0, "y": 0})

    snapshot = editor.snapshot()
    snapshot["nodes"][0]["data"]["label"] = "changed"

    assert editor.nodes[0]["data"]["label"] == "SMS"
    assert snapshot["edges"] == []
