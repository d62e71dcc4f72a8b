"""Tests for the node type catalog and the palettes derived from it."""
import pytest

from omniconsole.services.node_type_registry import NodeTypeRegistry, render_id_for
from omniconsole.models.node_type_data import NodeKind, NodeCategory, Palette


@pytest.fixture
def registry():
    return NodeTypeRegistry()


def test_render_id_for_hyphenated_kind():
    assert render_id_for(NodeKind.INCOMING_CALL) == "incomingCallNode"
    assert render_id_for(NodeKind.SMS) == "smsNode"


def test_every_kind_is_in_the_catalog(registry):
    kinds = {detail.kind for detail in registry.all()}
    assert kinds == set(NodeKind)


def test_lookup_by_kind_and_render_id(registry):
    by_kind = registry.lookup("ivr-menu")
    by_render_id = registry.lookup("ivrMenuNode")

    assert by_kind is not None
    assert by_kind is by_render_id
    assert by_kind.label == "IVR Menu"
    assert by_kind.category == NodeCategory.CALL


def test_unknown_identifier_has_no_fallback(registry):
    assert registry.lookup("faxNode") is None
    assert registry.lookup("") is None


def test_handles(registry):
    decision = registry.lookup("decision")
    assert decision.handles.outputs == ["yes", "no"]
    assert decision.handles.acceptsInput

    assert registry.lookup("stop").handles.outputs == []
    assert registry.lookup("end-call").handles.outputs == []
    assert not registry.lookup("webhook").handles.acceptsInput
    assert registry.lookup("sms").handles.outputs == ["a"]


def test_colors_follow_category(registry):
    assert registry.lookup("stop").colors.border == "#ef4444"
    assert registry.lookup("end-call").colors.border == "#ef4444"
    assert registry.lookup("make-call").colors.border == "#f59e0b"
    assert registry.lookup("whatsapp").colors.bg == "#ecfccb"


def test_default_data(registry):
    assert registry.lookup("email").default_data() == {"label": "Send Email", "content": ""}


def test_flow_palette_groups_in_order(registry):
    groups = registry.palette(Palette.FLOW)

    assert [group.label for group in groups] == ["Trigger", "Stop", "Call", "Communication", "Function"]
    call_group = groups[2]
    assert [item.kind.value for item in call_group.items] == [
        "incoming-call", "end-call", "call-forward", "make-call", "ivr-menu", "play"
    ]
    communication = [item.label for item in groups[3].items]
    assert communication == ["SMS", "Whatsapp", "Send Email"]


def test_campaign_palette(registry):
    items = [item.kind.value for group in registry.palette(Palette.CAMPAIGN) for item in group.items]
    assert sorted(items) == sorted(["sms", "voip", "whatsapp", "rcs", "decision", "wait"])


def test_palette_search_is_case_insensitive_and_drops_empty_groups(registry):
    groups = registry.palette(Palette.FLOW, search="CALL")

    assert [group.label for group in groups] == ["Call", "Function"]
    labels = [item.label for group in groups for item in group.items]
    assert labels == ["Incoming Call", "End Call", "Call Forward", "Make Call", "Callback"]


def test_palette_search_without_match(registry):
    assert registry.palette(Palette.FLOW, search="zzz") == []


def test_is_trigger(registry):
    assert registry.is_trigger("webhookNode")
    assert registry.is_trigger("trigger")
    assert not registry.is_trigger("smsNode")
    assert not registry.is_trigger("unknownNode")
