"""
Node Type Registry

One catalog of every node kind a flow can hold. Both builder palettes are
derived from it by filtering, so the two never drift apart.
"""
from typing import Optional, List, Dict

# Models
from omniconsole.models.node_type_data import (
    NodeKind,
    NodeCategory,
    Palette,
    NodeColors,
    NodeHandles,
    NodeTypeDetail,
    PaletteGroup,
)

NODE_STYLES: Dict[str, NodeColors] = {
    "trigger": NodeColors(bg="#f3f4f6", border="#3b82f6", icon="#3b82f6"),
    "stop": NodeColors(bg="#fee2e2", border="#ef4444", icon="#ef4444"),
    "call": NodeColors(bg="#fee2e2", border="#f59e0b", icon="#f59e0b"),
    "sms": NodeColors(bg="#dbeafe", border="#3b82f6", icon="#3b82f6"),
    "whatsapp": NodeColors(bg="#ecfccb", border="#84cc16", icon="#84cc16"),
    "voip": NodeColors(bg="#ede9fe", border="#8b5cf6", icon="#8b5cf6"),
    "rcs": NodeColors(bg="#fef3c7", border="#f97316", icon="#f97316"),
    "function": NodeColors(bg="#f3f4f6", border="#64748b", icon="#64748b"),
}

CATEGORY_LABELS: Dict[NodeCategory, str] = {
    NodeCategory.TRIGGER: "Trigger",
    NodeCategory.STOP: "Stop",
    NodeCategory.CALL: "Call",
    NodeCategory.COMMUNICATION: "Communication",
    NodeCategory.FUNCTION: "Function",
}

# Define all node kinds with their details, in palette order
NODE_CATALOG = [
    {"kind": NodeKind.TRIGGER, "label": "Trigger", "category": NodeCategory.TRIGGER, "icon": "Webhook", "style": "trigger",
     "accepts_input": False, "outputs": ["a"], "palettes": []},
    {"kind": NodeKind.WEBHOOK, "label": "Webhook", "category": NodeCategory.TRIGGER, "icon": "Webhook", "style": "trigger",
     "accepts_input": False, "outputs": ["a"], "palettes": [Palette.FLOW],
     "description": "Entry point fired by an external event"},
    {"kind": NodeKind.STOP, "label": "Stop", "category": NodeCategory.STOP, "icon": "StopCircle", "style": "stop",
     "outputs": [], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.INCOMING_CALL, "label": "Incoming Call", "category": NodeCategory.CALL, "icon": "Phone", "style": "call",
     "outputs": ["a"], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.END_CALL, "label": "End Call", "category": NodeCategory.CALL, "icon": "StopCircle", "style": "stop",
     "outputs": [], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.CALL_FORWARD, "label": "Call Forward", "category": NodeCategory.CALL, "icon": "Phone", "style": "call",
     "outputs": ["a"], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.MAKE_CALL, "label": "Make Call", "category": NodeCategory.CALL, "icon": "Phone", "style": "call",
     "outputs": ["a"], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.IVR_MENU, "label": "IVR Menu", "category": NodeCategory.CALL, "icon": "Menu", "style": "call",
     "outputs": ["a"], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.PLAY, "label": "Play", "category": NodeCategory.CALL, "icon": "Play", "style": "call",
     "outputs": ["a"], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.SMS, "label": "SMS", "category": NodeCategory.COMMUNICATION, "icon": "Send", "style": "sms",
     "outputs": ["a"], "palettes": [Palette.FLOW, Palette.CAMPAIGN]},
    {"kind": NodeKind.VOIP, "label": "VOIP", "category": NodeCategory.COMMUNICATION, "icon": "Phone", "style": "voip",
     "outputs": ["a"], "palettes": [Palette.CAMPAIGN]},
    {"kind": NodeKind.WHATSAPP, "label": "Whatsapp", "category": NodeCategory.COMMUNICATION, "icon": "MessageCircle", "style": "whatsapp",
     "outputs": ["a"], "palettes": [Palette.FLOW, Palette.CAMPAIGN]},
    {"kind": NodeKind.RCS, "label": "RCS", "category": NodeCategory.COMMUNICATION, "icon": "MessageSquare", "style": "rcs",
     "outputs": ["a"], "palettes": [Palette.CAMPAIGN]},
    {"kind": NodeKind.EMAIL, "label": "Send Email", "category": NodeCategory.COMMUNICATION, "icon": "Mail", "style": "function",
     "outputs": ["a"], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.CALLBACK, "label": "Callback", "category": NodeCategory.FUNCTION, "icon": "File", "style": "function",
     "outputs": ["a"], "palettes": [Palette.FLOW]},
    {"kind": NodeKind.DECISION, "label": "Decision", "category": NodeCategory.FUNCTION, "icon": "GitBranch", "style": "function",
     "outputs": ["yes", "no"], "palettes": [Palette.CAMPAIGN],
     "description": "Branches on the yes/no output ports"},
    {"kind": NodeKind.WAIT, "label": "Wait", "category": NodeCategory.FUNCTION, "icon": "Clock", "style": "function",
     "outputs": ["a"], "palettes": [Palette.CAMPAIGN]},
]


def render_id_for(kind: NodeKind) -> str:
    """
    "incoming-call" -> "incomingCallNode"
    """
    head, *rest = kind.value.split("-")
    return head + "".join(part.capitalize() for part in rest) + "Node"


class NodeTypeRegistry:
    def __init__(self):
        self._details: List[NodeTypeDetail] = [
            NodeTypeDetail(
                kind=entry["kind"],
                nodeType=render_id_for(entry["kind"]),
                label=entry["label"],
                category=entry["category"],
                icon=entry["icon"],
                colors=NODE_STYLES[entry["style"]],
                handles=NodeHandles(acceptsInput=entry.get("accepts_input", True), outputs=entry["outputs"]),
                palettes=entry["palettes"],
                description=entry.get("description"),
            )
            for entry in NODE_CATALOG
        ]
        self._by_identifier: Dict[str, NodeTypeDetail] = {}
        for detail in self._details:
            self._by_identifier[detail.kind.value] = detail
            self._by_identifier[detail.nodeType] = detail

    def all(self) -> List[NodeTypeDetail]:
        return list(self._details)

    def lookup(self, identifier: str) -> Optional[NodeTypeDetail]:
        """
        Find a node type by kind ("ivr-menu") or render id ("ivrMenuNode").
        Unknown identifiers have no fallback and return None.
        """
        return self._by_identifier.get(identifier)

    def by_category(self, category: NodeCategory) -> List[NodeTypeDetail]:
        return [detail for detail in self._details if detail.category == category]

    def palette(self, palette: Palette, search: str = "") -> List[PaletteGroup]:
        """
        Palette groups in category order. A search keeps items whose label
        contains the text (case-insensitive) and drops groups left empty.
        """
        needle = search.strip().lower()
        groups: List[PaletteGroup] = []
        for category in NodeCategory:
            items = [
                detail for detail in self.by_category(category)
                if palette in detail.palettes and needle in detail.label.lower()
            ]
            if items:
                groups.append(PaletteGroup(category=category, label=CATEGORY_LABELS[category], items=items))
        return groups

    def is_trigger(self, node_type: str) -> bool:
        detail = self.lookup(node_type)
        return detail is not None and detail.category == NodeCategory.TRIGGER
