from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
import json

# Utils
from omniconsole.utils.time_utils import utc_now

# Exceptions
from omniconsole.exceptions.console_exception import FlowDataCorruptedException

# Version 1 flows stored nodes/edges as JSON text; version 2 stores native arrays
FLOW_SCHEMA_VERSION = 2
LEGACY_FLOW_SCHEMA_VERSION = 1


class FlowNodePosition(BaseModel):
    model_config = ConfigDict(extra='allow')

    x: float
    y: float

class FlowNodeData(BaseModel):
    model_config = ConfigDict(extra='allow')  # Node specific payload (e.g. message text, ivr options)

    label: str = ""
    content: str = ""

class FlowNode(BaseModel):
    model_config = ConfigDict(extra='allow')  # Canvas fields like width, height, selected

    id: str
    type: str
    position: FlowNodePosition
    data: FlowNodeData

class FlowEdge(BaseModel):
    model_config = ConfigDict(extra='allow')  # Visual fields like style, animated, markerEnd

    id: str
    source: str
    target: str
    sourceHandle: Optional[str] = None
    targetHandle: Optional[str] = None


class FlowRequest(BaseModel):
    """
    Body of POST /api/flows and PUT /api/flows/{id}
    """
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    nodes: List[FlowNode] = Field(default_factory=list)
    edges: List[FlowEdge] = Field(default_factory=list)
    isActive: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value

    def node_documents(self) -> List[Dict[str, Any]]:
        # Only what the client sent, so a reload hands back the same structure
        return [node.model_dump(mode="json", exclude_unset=True) for node in self.nodes]

    def edge_documents(self) -> List[Dict[str, Any]]:
        return [edge.model_dump(mode="json", exclude_unset=True) for edge in self.edges]


class FlowData(BaseModel):
    id: Optional[str] = None  # MongoDB _id
    tenantId: str
    name: str
    description: Optional[str] = None
    nodes: List[Dict[str, Any]] = Field(default_factory=list)
    edges: List[Dict[str, Any]] = Field(default_factory=list)
    isActive: bool = True
    schemaVersion: int = FLOW_SCHEMA_VERSION
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)


def _parse_graph_field(value: Any, field_name: str) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FlowDataCorruptedException(detail=f"{field_name}: {e}")
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise FlowDataCorruptedException(detail=f"{field_name}: expected a list of objects")
    return value


def upgrade_flow_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Bring a stored flow document up to the current schema version.

    Legacy documents (no schemaVersion) may hold nodes/edges as JSON text.
    They are parsed here, once, on read. Fields added to node data since the
    document was written are left absent.
    """
    version = document.get("schemaVersion") or LEGACY_FLOW_SCHEMA_VERSION
    if version > FLOW_SCHEMA_VERSION:
        raise FlowDataCorruptedException(detail=f"unknown schema version {version}")

    upgraded = dict(document)
    upgraded["nodes"] = _parse_graph_field(document.get("nodes"), "nodes")
    upgraded["edges"] = _parse_graph_field(document.get("edges"), "edges")
    upgraded["schemaVersion"] = FLOW_SCHEMA_VERSION
    return upgraded


class FlowGraphIssue(BaseModel):
    code: str  # dangling_edge | duplicate_node_id | missing_trigger | multiple_triggers
    message: str
    nodeId: Optional[str] = None
    edgeId: Optional[str] = None

class FlowInspection(BaseModel):
    """
    Graph health report. Issues are informational; the flow is saved regardless.
    """
    flowId: Optional[str] = None
    nodeCount: int
    edgeCount: int
    triggerCount: int
    issues: List[FlowGraphIssue] = Field(default_factory=list)
