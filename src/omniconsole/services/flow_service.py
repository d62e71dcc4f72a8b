from typing import List, Dict, Any

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.flow_db import FlowDB

# Services
from omniconsole.services.node_type_registry import NodeTypeRegistry

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.flow_data import FlowData, FlowRequest, FlowInspection, FlowGraphIssue, FLOW_SCHEMA_VERSION

# Exceptions
from omniconsole.exceptions.console_exception import NotFoundException


def inspect_flow_graph(nodes: List[Dict[str, Any]], edges: List[Dict[str, Any]], registry: NodeTypeRegistry) -> FlowInspection:
    """
    Report the graph problems a flow is allowed to be saved with:
    duplicate node ids, edges pointing at missing nodes and a trigger count other than one.
    """
    issues: List[FlowGraphIssue] = []
    node_ids = set()
    for node in nodes:
        node_id = node.get("id")
        if node_id in node_ids:
            issues.append(FlowGraphIssue(
                code="duplicate_node_id",
                message=f"Duplicate node ID: {node_id}",
                nodeId=node_id
            ))
        node_ids.add(node_id)

    for edge in edges:
        for end in ("source", "target"):
            if edge.get(end) not in node_ids:
                issues.append(FlowGraphIssue(
                    code="dangling_edge",
                    message=f"Edge '{edge.get('id')}' {end} refers to non-existent node '{edge.get(end)}'",
                    edgeId=edge.get("id")
                ))

    trigger_count = sum(1 for node in nodes if registry.is_trigger(str(node.get("type", ""))))
    if trigger_count == 0:
        issues.append(FlowGraphIssue(code="missing_trigger", message="Flow has no trigger node"))
    elif trigger_count > 1:
        issues.append(FlowGraphIssue(code="multiple_triggers", message=f"Flow has {trigger_count} trigger nodes"))

    return FlowInspection(
        nodeCount=len(nodes),
        edgeCount=len(edges),
        triggerCount=trigger_count,
        issues=issues
    )


class FlowService:
    def __init__(self, log_util: LogUtil, flow_db: FlowDB, registry: NodeTypeRegistry):
        self.log_util = log_util
        self.flow_db = flow_db
        self.registry = registry

    async def get_flows(self, principal: Principal) -> List[FlowData]:
        return await self.flow_db.get_flows(principal.tenant_id)

    async def get_active_flows(self, principal: Principal) -> List[FlowData]:
        return await self.flow_db.get_flows(principal.tenant_id, active_only=True)

    async def get_flow(self, principal: Principal, flow_id: str) -> FlowData:
        flow = await self.flow_db.get_flow(principal.tenant_id, flow_id)
        if flow is None:
            raise NotFoundException(message="Flow not found")
        return flow

    async def create_flow(self, principal: Principal, flow_data: dict) -> FlowData:
        """
        Create a flow for the caller's tenant. The graph is stored as sent;
        dangling edges or a missing trigger do not block the save.
        """
        request = validate_payload(FlowRequest, flow_data, "flow")
        flow = FlowData(
            tenantId=principal.tenant_id,
            name=request.name,
            description=request.description,
            nodes=request.node_documents(),
            edges=request.edge_documents(),
            isActive=request.isActive
        )
        saved_flow = await self.flow_db.create_flow(flow)
        self.log_util.info(
            service_name="FlowService",
            message=f"Flow {saved_flow.id} created for tenant {principal.tenant_id} with {len(saved_flow.nodes)} nodes"
        )
        return saved_flow

    async def update_flow(self, principal: Principal, flow_id: str, flow_data: dict) -> FlowData:
        """
        Update a flow. Only the fields present in the body change; nodes and edges
        given in the body replace the stored lists (last write wins).
        """
        existing = await self.get_flow(principal, flow_id)
        if not isinstance(flow_data, dict):
            flow_data = {}
        merged = {
            "name": existing.name,
            "description": existing.description,
            "isActive": existing.isActive,
            **flow_data
        }
        request = validate_payload(FlowRequest, merged, "flow")

        fields: Dict[str, Any] = {}
        for key in ("name", "description", "isActive"):
            if key in flow_data:
                fields[key] = getattr(request, key)
        if "nodes" in flow_data:
            fields["nodes"] = request.node_documents()
        if "edges" in flow_data:
            fields["edges"] = request.edge_documents()
        if "nodes" in fields or "edges" in fields:
            # Legacy records are rewritten as native arrays on their first graph update
            fields["nodes"] = fields.get("nodes", existing.nodes)
            fields["edges"] = fields.get("edges", existing.edges)
            fields["schemaVersion"] = FLOW_SCHEMA_VERSION

        updated = await self.flow_db.update_flow(principal.tenant_id, flow_id, fields)
        if updated is None:
            raise NotFoundException(message="Flow not found")
        self.log_util.info(service_name="FlowService", message=f"Flow {flow_id} updated: {sorted(fields.keys())}")
        return updated

    async def delete_flow(self, principal: Principal, flow_id: str) -> Dict[str, str]:
        deleted = await self.flow_db.delete_flow(principal.tenant_id, flow_id)
        if not deleted:
            raise NotFoundException(message="Flow not found")
        self.log_util.info(service_name="FlowService", message=f"Flow {flow_id} deleted")
        return {"message": "Flow deleted successfully"}

    async def inspect_flow(self, principal: Principal, flow_id: str) -> FlowInspection:
        flow = await self.get_flow(principal, flow_id)
        inspection = inspect_flow_graph(flow.nodes, flow.edges, self.registry)
        inspection.flowId = flow.id
        return inspection
