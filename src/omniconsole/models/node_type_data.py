from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class NodeKind(str, Enum):
    TRIGGER = "trigger"
    WEBHOOK = "webhook"
    STOP = "stop"
    INCOMING_CALL = "incoming-call"
    END_CALL = "end-call"
    CALL_FORWARD = "call-forward"
    MAKE_CALL = "make-call"
    IVR_MENU = "ivr-menu"
    PLAY = "play"
    SMS = "sms"
    WHATSAPP = "whatsapp"
    EMAIL = "email"
    CALLBACK = "callback"
    VOIP = "voip"
    RCS = "rcs"
    DECISION = "decision"
    WAIT = "wait"


class NodeCategory(str, Enum):
    TRIGGER = "trigger"
    STOP = "stop"
    CALL = "call"
    COMMUNICATION = "communication"
    FUNCTION = "function"


class Palette(str, Enum):
    FLOW = "flow"  # call/IVR oriented builder with categorised, searchable palette
    CAMPAIGN = "campaign"  # communication builder with add-node buttons


class NodeColors(BaseModel):
    bg: str
    border: str
    icon: str


class NodeHandles(BaseModel):
    acceptsInput: bool = True  # one unnamed target port
    outputs: List[str] = Field(default_factory=list)  # source port ids; empty for terminal nodes


class NodeTypeDetail(BaseModel):
    """
    Render descriptor for one node kind
    """
    kind: NodeKind
    nodeType: str  # render id used in saved flows, e.g. "smsNode"
    label: str
    category: NodeCategory
    icon: str
    colors: NodeColors
    handles: NodeHandles
    palettes: List[Palette]
    description: Optional[str] = None

    def default_data(self) -> Dict[str, Any]:
        return {"label": self.label, "content": ""}


class PaletteGroup(BaseModel):
    category: NodeCategory
    label: str
    items: List[NodeTypeDetail]
