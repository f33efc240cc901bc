from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from ringside.models.role import PermissionRole

if TYPE_CHECKING:
    from ringside.models.role import Role


class Permission(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_permission_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str  # e.g. "create-match", "edit-wrestler"

    # Relationships
    roles: List["Role"] = Relationship(back_populates="permissions", link_model=PermissionRole)
