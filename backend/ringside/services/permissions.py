"""Role and permission checks for users."""
import logging
from typing import Union

from sqlmodel import Session, select

from ringside.models.permission import Permission
from ringside.models.role import PermissionRole, Role, RoleUser
from ringside.models.user import User

logger = logging.getLogger(__name__)


def assign_role(session: Session, user: User, role: Role) -> User:
    if all(r.id != role.id for r in user.roles):
        user.roles.append(role)
        session.add(user)
        session.flush()
        logger.info("Assigned role %s to user %s", role.slug, user.id)
    return user


def has_role(user: User, role: Union[Role, str]) -> bool:
    """role may be a Role or a role slug."""
    if isinstance(role, str):
        return any(r.slug == role for r in user.roles)
    return any(r.id == role.id for r in user.roles)


def give_permission_to(session: Session, role: Role, permission: Permission) -> Role:
    if all(p.id != permission.id for p in role.permissions):
        role.permissions.append(permission)
        session.add(role)
        session.flush()
        logger.info("Gave permission %s to role %s", permission.slug, role.slug)
    return role


def has_permission(session: Session, user: User, permission_slug: str) -> bool:
    """True if any of the user's roles carries the permission."""
    found = session.exec(
        select(Permission.id)
        .join(PermissionRole, PermissionRole.permission_id == Permission.id)
        .join(RoleUser, RoleUser.role_id == PermissionRole.role_id)
        .where(RoleUser.user_id == user.id, Permission.slug == permission_slug)
    ).first()
    return found is not None
