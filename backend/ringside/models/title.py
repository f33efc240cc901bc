from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from ringside.models.match_links import MatchTitle

if TYPE_CHECKING:
    from ringside.models.championship import Championship
    from ringside.models.match import Match


class Title(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_title_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str
    introduced_at: date
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    # Reign history only; the open reign is read through services.championships.current_champion
    championships: List["Championship"] = Relationship(
        back_populates="title", sa_relationship_kwargs={"order_by": "Championship.won_on"}
    )
    matches: List["Match"] = Relationship(back_populates="titles", link_model=MatchTitle)
