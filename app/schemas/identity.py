from pydantic import BaseModel

from app.models.user import Role


class CallerIdentity(BaseModel):
    """Authenticated caller as forwarded by the identity gateway."""

    id: int
    email: str | None = None
    role: Role
