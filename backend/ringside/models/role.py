from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.permission import Permission
    from ringside.models.user import User


class RoleUser(SQLModel, table=True):
    role_id: int = Field(foreign_key="role.id", primary_key=True)
    user_id: int = Field(foreign_key="user.id", primary_key=True)


class PermissionRole(SQLModel, table=True):
    permission_id: int = Field(foreign_key="permission.id", primary_key=True)
    role_id: int = Field(foreign_key="role.id", primary_key=True)


class Role(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_role_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    users: List["User"] = Relationship(back_populates="roles", link_model=RoleUser)
    permissions: List["Permission"] = Relationship(back_populates="roles", link_model=PermissionRole)
