from fastapi import Header, HTTPException

from app.config import settings
from app.models.user import Role
from app.schemas.identity import CallerIdentity
from app.utils.clock import Clock, system_clock


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")


async def get_current_user(
    x_user_id: int | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
    x_user_role: Role | None = Header(default=None),
) -> CallerIdentity:
    """Identity forwarded by the auth gateway in X-User-* headers."""
    if x_user_id is None or x_user_role is None:
        raise HTTPException(status_code=401, detail="Missing caller identity")
    return CallerIdentity(id=x_user_id, email=x_user_email, role=x_user_role)


def get_clock() -> Clock:
    return system_clock
