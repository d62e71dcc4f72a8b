from fastapi import APIRouter, Request
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.node_type_registry import NodeTypeRegistry

# Models
from omniconsole.models.node_type_data import NodeCategory, Palette


def create_node_type_api(
    log_util: LogUtil,
    registry: NodeTypeRegistry
) -> APIRouter:
    router = APIRouter(
        prefix="/api/node-types",
        tags=["node-types"],
    )

    @router.get("")
    async def get_all_node_types(request: Request):
        """
        Get every node type the builders can render
        """
        return registry.all()

    @router.get("/category/{category}")
    async def get_node_types_by_category(request: Request, category: str):
        """
        Get node types by category (trigger, stop, call, communication, function)
        """
        valid_categories = [item.value for item in NodeCategory]
        if category not in valid_categories:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid category. Must be one of: {', '.join(valid_categories)}"
            )
        return registry.by_category(NodeCategory(category))

    @router.get("/palette/{palette}")
    async def get_palette(request: Request, palette: str, search: str = ""):
        """
        Get the grouped palette of a builder, optionally filtered by label
        """
        valid_palettes = [item.value for item in Palette]
        if palette not in valid_palettes:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid palette. Must be one of: {', '.join(valid_palettes)}"
            )
        return registry.palette(Palette(palette), search=search)

    @router.get("/{identifier}")
    async def get_node_type(request: Request, identifier: str):
        """
        Get a node type by kind ("ivr-menu") or render id ("ivrMenuNode")
        """
        node_type = registry.lookup(identifier)
        if node_type is None:
            log_util.debug(service_name="NodeTypeAPI", message=f"Unknown node type requested: {identifier}")
            raise HTTPException(status_code=404, detail=f"Node type not found: {identifier}")
        return node_type

    return router
