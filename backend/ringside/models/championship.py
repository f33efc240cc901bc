from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from ringside.models.title import Title
    from ringside.models.wrestler import Wrestler


class Championship(SQLModel, table=True):
    """One title reign: wrestler_id held title_id from won_on until lost_on (None = still champion)."""

    id: Optional[int] = Field(default=None, primary_key=True)
    title_id: int = Field(foreign_key="title.id", index=True)
    wrestler_id: int = Field(foreign_key="wrestler.id", index=True)
    won_on: date
    lost_on: Optional[date] = Field(default=None)
    successful_defenses: int = Field(default=0)
    won_in_match_id: Optional[int] = Field(default=None, foreign_key="match.id")  # None for seeded reigns
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    title: "Title" = Relationship(back_populates="championships")
    wrestler: "Wrestler" = Relationship(back_populates="championships")

    @property
    def is_open(self) -> bool:
        return self.lost_on is None
