from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.match import Match


class MatchType(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_match_type_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str
    total_competitors: int = Field(default=2)
    number_of_sides: int = Field(default=2)
    multiple_referees: bool = Field(default=False)
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    matches: List["Match"] = Relationship(back_populates="match_type")

    def needs_multiple_referees(self) -> bool:
        return bool(self.multiple_referees)

    def required_referees(self) -> int:
        return 2 if self.needs_multiple_referees() else 1
