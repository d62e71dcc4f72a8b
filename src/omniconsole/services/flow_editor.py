import copy
import random
from typing import Optional, List, Dict, Any

# Services
from omniconsole.services.node_type_registry import NodeTypeRegistry

# Edge look used by the builder canvas
EDGE_TYPE = "smoothstep"
EDGE_MARKER_END = {"type": "arrowclosed"}
EDGE_STYLE = {"stroke": "#94a3b8", "strokeWidth": 2, "strokeDasharray": "5 5"}
RANDOM_PLACEMENT_SPAN = 300


def edge_id_for(source: str, target: str, source_handle: Optional[str] = None, target_handle: Optional[str] = None) -> str:
    return f"reactflow__edge-{source}{source_handle or ''}-{target}{target_handle or ''}"


class FlowEditor:
    """
    In-memory graph behind the builder canvas. Nothing here touches storage;
    FlowPersistenceAdapter takes a snapshot when the user saves.

    Node ids are "<type>-<count + 1>" with no uniqueness check, so deleting a
    node and adding another can hand out an id that is already in use.
    """

    def __init__(
        self,
        nodes: Optional[List[Dict[str, Any]]] = None,
        edges: Optional[List[Dict[str, Any]]] = None,
        registry: Optional[NodeTypeRegistry] = None,
        viewport: Optional[Dict[str, float]] = None
    ):
        self.nodes: List[Dict[str, Any]] = copy.deepcopy(nodes) if nodes else []
        self.edges: List[Dict[str, Any]] = copy.deepcopy(edges) if edges else []
        self.registry = registry or NodeTypeRegistry()
        self.viewport = viewport or {"x": 0.0, "y": 0.0, "zoom": 1.0}

    def project(self, client_x: float, client_y: float, bounds_left: float = 0, bounds_top: float = 0) -> Dict[str, float]:
        """
        Convert a screen drop point into canvas coordinates using the current viewport.
        """
        zoom = self.viewport.get("zoom") or 1.0
        return {
            "x": (client_x - bounds_left - self.viewport.get("x", 0.0)) / zoom,
            "y": (client_y - bounds_top - self.viewport.get("y", 0.0)) / zoom,
        }

    def add_node(self, node_type: str, position: Dict[str, float], label: Optional[str] = None) -> Dict[str, Any]:
        """
        Drop a palette item at position. The label defaults to the palette label
        of the node type, or the raw type when the registry does not know it.
        """
        if label is None:
            detail = self.registry.lookup(node_type)
            label = detail.label if detail else node_type

        node = {
            "id": f"{node_type}-{len(self.nodes) + 1}",
            "type": node_type,
            "position": {"x": position["x"], "y": position["y"]},
            "data": {"label": label, "content": ""},
        }
        self.nodes.append(node)
        return node

    def add_node_at_random(self, kind: str) -> Dict[str, Any]:
        position = {
            "x": random.random() * RANDOM_PLACEMENT_SPAN,
            "y": random.random() * RANDOM_PLACEMENT_SPAN,
        }
        node = {
            "id": f"{kind}-{len(self.nodes) + 1}",
            "type": f"{kind}Node",
            "position": position,
            "data": {"label": f"{kind[:1].upper()}{kind[1:]} Node", "content": ""},
        }
        self.nodes.append(node)
        return node

    def connect(
        self,
        source: str,
        target: str,
        source_handle: Optional[str] = None,
        target_handle: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Connect two ports. Any pair may be connected, including out of a stop node.
        Returns None when the same ports are already connected.
        """
        for edge in self.edges:
            if (edge.get("source") == source and edge.get("target") == target
                    and edge.get("sourceHandle") == source_handle
                    and edge.get("targetHandle") == target_handle):
                return None

        edge = {
            "id": edge_id_for(source, target, source_handle, target_handle),
            "source": source,
            "target": target,
            "sourceHandle": source_handle,
            "targetHandle": target_handle,
            "type": EDGE_TYPE,
            "markerEnd": dict(EDGE_MARKER_END),
            "style": dict(EDGE_STYLE),
            "animated": True,
        }
        self.edges.append(edge)
        return edge

    def remove_node(self, node_id: str) -> bool:
        before = len(self.nodes)
        self.nodes = [node for node in self.nodes if node.get("id") != node_id]
        if len(self.nodes) == before:
            return False
        self.edges = [
            edge for edge in self.edges
            if edge.get("source") != node_id and edge.get("target") != node_id
        ]
        return True

    def remove_edge(self, edge_id: str) -> bool:
        before = len(self.edges)
        self.edges = [edge for edge in self.edges if edge.get("id") != edge_id]
        return len(self.edges) != before

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        return {"nodes": copy.deepcopy(self.nodes), "edges": copy.deepcopy(self.edges)}
