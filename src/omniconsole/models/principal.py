from pydantic import BaseModel


class Principal(BaseModel):
    """
    Who is calling: the user and the tenant every query is scoped to
    """
    user_id: int
    tenant_id: str
    role: str = "member"

    @property
    def is_admin(self) -> bool:
        return self.role in ("admin", "owner")
