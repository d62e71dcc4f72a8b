from typing import Optional
from fastapi import Header
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.principal_service import PrincipalService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_principal_dependency(log_util: LogUtil, principal_service: PrincipalService):
    """
    FastAPI dependency resolving the caller from the x-user-id header
    """
    async def get_principal(x_user_id: Optional[str] = Header(default=None, alias="x-user-id")) -> Principal:
        try:
            return await principal_service.resolve(x_user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "PrincipalService", "resolving the caller", e)

    return get_principal
