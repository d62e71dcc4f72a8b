from typing import Optional

# Services
from omniconsole.services.flow_editor import FlowEditor
from omniconsole.services.flow_service import FlowService

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.flow_data import FlowData

# Exceptions
from omniconsole.exceptions.console_exception import ValidationException


class FlowPersistenceAdapter:
    """
    Saves the editor's graph as a flow and loads a stored flow back into an editor.
    """

    def __init__(self, flow_service: FlowService):
        self.flow_service = flow_service

    async def save(
        self,
        principal: Principal,
        editor: FlowEditor,
        name: str,
        flow_id: Optional[str] = None,
        description: Optional[str] = None
    ) -> FlowData:
        """
        Create the flow when flow_id is None, otherwise update it.
        A blank name is rejected before anything is sent to storage.
        """
        if not name or not name.strip():
            raise ValidationException(
                message="Please enter a name for your flow",
                errors=[{"path": "name", "message": "Name is required", "type": "value_error"}]
            )

        payload = {"name": name, **editor.snapshot()}
        if description is not None:
            payload["description"] = description

        if flow_id is None:
            return await self.flow_service.create_flow(principal, payload)
        return await self.flow_service.update_flow(principal, flow_id, payload)

    async def load(self, principal: Principal, flow_id: str) -> FlowEditor:
        flow = await self.flow_service.get_flow(principal, flow_id)
        return FlowEditor(nodes=flow.nodes, edges=flow.edges, registry=self.flow_service.registry)
