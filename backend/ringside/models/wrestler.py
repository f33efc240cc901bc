from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.championship import Championship
    from ringside.models.match_links import MatchWrestler


class Wrestler(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_wrestler_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str
    hired_at: date
    created_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    match_links: List["MatchWrestler"] = Relationship(back_populates="wrestler")
    championships: List["Championship"] = Relationship(
        back_populates="wrestler", sa_relationship_kwargs={"order_by": "Championship.won_on"}
    )
