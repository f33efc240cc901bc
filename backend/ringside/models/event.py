from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.match import Match


class Event(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_event_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str
    date: date
    preview: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    matches: List["Match"] = Relationship(
        back_populates="event", sa_relationship_kwargs={"order_by": "Match.match_number"}
    )
