from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

from ringside.models.match_links import MatchReferee

if TYPE_CHECKING:
    from ringside.models.match import Match


class Referee(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    last_name: str
    hired_at: date
    created_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    matches: List["Match"] = Relationship(back_populates="referees", link_model=MatchReferee)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
