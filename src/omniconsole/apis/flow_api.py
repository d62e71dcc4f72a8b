from fastapi import APIRouter, Depends
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.flow_service import FlowService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_flow_api(
    log_util: LogUtil,
    flow_service: FlowService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api/flows",
        tags=["flows"],
    )

    @router.get("")
    async def get_flows(principal: Principal = Depends(get_principal)):
        try:
            return await flow_service.get_flows(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "FlowAPI", "fetching flows", e)

    @router.get("/active")
    async def get_active_flows(principal: Principal = Depends(get_principal)):
        try:
            return await flow_service.get_active_flows(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "FlowAPI", "fetching active flows", e)

    @router.get("/{flow_id}")
    async def get_flow(flow_id: str, principal: Principal = Depends(get_principal)):
        """
        Get one flow. Stored graph data that cannot be parsed answers 422.
        """
        try:
            return await flow_service.get_flow(principal, flow_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "FlowAPI", "fetching flow", e)

    @router.get("/{flow_id}/inspection")
    async def inspect_flow(flow_id: str, principal: Principal = Depends(get_principal)):
        """
        Report dangling edges, duplicate node ids and the trigger count of a flow
        """
        try:
            return await flow_service.inspect_flow(principal, flow_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "FlowAPI", "inspecting flow", e)

    @router.post("", status_code=201)
    async def create_flow(flow_data: dict, principal: Principal = Depends(get_principal)):
        """
        Create a flow.

        Request body:
        {
            "name": "Welcome Sequence",
            "description": "optional",
            "nodes": [{"id": "...", "type": "smsNode", "position": {"x": 0, "y": 0}, "data": {"label": "SMS", "content": ""}}],
            "edges": [{"id": "...", "source": "...", "target": "..."}]
        }
        """
        try:
            return await flow_service.create_flow(principal, flow_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "FlowAPI", "creating flow", e)

    @router.put("/{flow_id}")
    async def update_flow(flow_id: str, flow_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await flow_service.update_flow(principal, flow_id, flow_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "FlowAPI", "updating flow", e)

    @router.delete("/{flow_id}")
    async def delete_flow(flow_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await flow_service.delete_flow(principal, flow_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "FlowAPI", "deleting flow", e)

    return router
