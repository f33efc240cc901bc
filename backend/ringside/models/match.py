from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from ringside.models.match_links import MatchLoser, MatchReferee, MatchTitle, MatchWinner

if TYPE_CHECKING:
    from ringside.models.event import Event
    from ringside.models.match_decision import MatchDecision
    from ringside.models.match_links import MatchWrestler
    from ringside.models.match_type import MatchType
    from ringside.models.referee import Referee
    from ringside.models.stipulation import Stipulation
    from ringside.models.title import Title
    from ringside.models.wrestler import Wrestler


class Match(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("event_id", "match_number", name="uq_event_match_number"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    match_type_id: int = Field(foreign_key="matchtype.id")
    stipulation_id: Optional[int] = Field(default=None, foreign_key="stipulation.id")
    match_decision_id: Optional[int] = Field(default=None, foreign_key="matchdecision.id")
    match_number: int  # 1-based running order within the event
    preview: Optional[str] = None
    result: Optional[str] = None
    titles_changed_at: Optional[datetime] = Field(default=None)  # set once record_title_change has run
    created_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    event: "Event" = Relationship(back_populates="matches")
    match_type: "MatchType" = Relationship(back_populates="matches")
    stipulation: Optional["Stipulation"] = Relationship(back_populates="matches")
    decision: Optional["MatchDecision"] = Relationship(back_populates="matches")

    # Wrestlers carry side_number, so they go through the association object
    wrestler_links: List["MatchWrestler"] = Relationship(
        back_populates="match", sa_relationship_kwargs={"order_by": "MatchWrestler.id"}
    )
    referees: List["Referee"] = Relationship(back_populates="matches", link_model=MatchReferee)
    titles: List["Title"] = Relationship(back_populates="matches", link_model=MatchTitle)
    winners: List["Wrestler"] = Relationship(link_model=MatchWinner)
    losers: List["Wrestler"] = Relationship(link_model=MatchLoser)

    @property
    def wrestlers(self) -> List["Wrestler"]:
        return [link.wrestler for link in self.wrestler_links]

    @property
    def date(self):
        return self.event.date
