from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from ringside.models.role import RoleUser

if TYPE_CHECKING:
    from ringside.models.role import Role


class User(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("email", name="uq_user_email"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    roles: List["Role"] = Relationship(back_populates="users", link_model=RoleUser)
