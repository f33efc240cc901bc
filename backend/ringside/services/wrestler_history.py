"""Match history for a wrestler. A match is past once its event date is before today."""
from datetime import date
from typing import List, Optional

from sqlmodel import Session

from ringside.models.match import Match
from ringside.models.wrestler import Wrestler
from ringside.services.match_associations import matches_with_wrestler


def is_past(match: Match, today: Optional[date] = None) -> bool:
    return match.event.date < (today or date.today())


def past_matches(session: Session, wrestler: Wrestler, today: Optional[date] = None) -> List[Match]:
    """Past matches in date order, oldest first."""
    return [m for m in matches_with_wrestler(session, wrestler.id) if is_past(m, today)]


def has_past_matches(session: Session, wrestler: Wrestler, today: Optional[date] = None) -> bool:
    return len(past_matches(session, wrestler, today)) > 0


def first_match_date(session: Session, wrestler: Wrestler, today: Optional[date] = None) -> Optional[date]:
    matches = past_matches(session, wrestler, today)
    return matches[0].event.date if matches else None
