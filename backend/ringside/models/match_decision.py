from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.match import Match


class MatchDecision(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("slug", name="uq_match_decision_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str  # "Pinfall" | "Submission" | "Disqualification" | "Count Out" | ...
    slug: str
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    matches: List["Match"] = Relationship(back_populates="decision")
