from typing import Optional

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.environment_utils import EnvironmentUtils

# Database
from omniconsole.database.tenant_db import TenantDB

# Models
from omniconsole.models.principal import Principal

# Exceptions
from omniconsole.exceptions.console_exception import UnauthorizedException, NotFoundException


class PrincipalService:
    def __init__(self, log_util: LogUtil, environment_utils: EnvironmentUtils, tenant_db: TenantDB):
        self.log_util = log_util
        self.environment_utils = environment_utils
        self.tenant_db = tenant_db

    async def resolve(self, user_header: Optional[str]) -> Principal:
        """
        Resolve the x-user-id header into the caller's user, primary tenant and role.

        Without the header only a development environment falls back to DEFAULT_USER_ID.
        """
        if user_header is None or not user_header.strip():
            if not self.environment_utils.is_development():
                raise UnauthorizedException()
            user_id = int(self.environment_utils.get_env_variable("DEFAULT_USER_ID"))
        else:
            try:
                user_id = int(user_header)
            except ValueError:
                raise UnauthorizedException()

        membership = await self.tenant_db.get_primary_membership(user_id)
        if membership is None:
            self.log_util.warning(service_name="PrincipalService", message=f"No tenant membership for user {user_id}")
            raise NotFoundException(message="No tenant found for user")

        return Principal(user_id=user_id, tenant_id=membership.tenantId, role=membership.role)
