from app.models.user import Role


def is_admin(role: Role | str | None) -> bool:
    return role == Role.ADMIN


def is_owner_or_admin(actor_id: int, role: Role | str | None, resource_owner_id: int) -> bool:
    return actor_id == resource_owner_id or is_admin(role)
