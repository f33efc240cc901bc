from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.match import Match


class Stipulation(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_stipulation_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str  # e.g. "No Disqualification", "Steel Cage"
    slug: str
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    matches: List["Match"] = Relationship(back_populates="stipulation")
