from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.match import Match
    from ringside.models.wrestler import Wrestler


class MatchWrestler(SQLModel, table=True):
    """A wrestler booked into a match on one side (0-based side_number)."""

    __table_args__ = (SAUniqueConstraint("match_id", "wrestler_id", name="uq_match_wrestler"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    wrestler_id: int = Field(foreign_key="wrestler.id", index=True)
    side_number: int
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    match: "Match" = Relationship(back_populates="wrestler_links")
    wrestler: "Wrestler" = Relationship(back_populates="match_links")


class MatchReferee(SQLModel, table=True):
    match_id: int = Field(foreign_key="match.id", primary_key=True)
    referee_id: int = Field(foreign_key="referee.id", primary_key=True)


class MatchTitle(SQLModel, table=True):
    match_id: int = Field(foreign_key="match.id", primary_key=True)
    title_id: int = Field(foreign_key="title.id", primary_key=True)


class MatchWinner(SQLModel, table=True):
    match_id: int = Field(foreign_key="match.id", primary_key=True)
    wrestler_id: int = Field(foreign_key="wrestler.id", primary_key=True)


class MatchLoser(SQLModel, table=True):
    match_id: int = Field(foreign_key="match.id", primary_key=True)
    wrestler_id: int = Field(foreign_key="wrestler.id", primary_key=True)
