"""
Roster synthesis: creates valid, uniquely named roster rows on demand.

Used by MatchBuilder and referee assignment to fill shortfalls, and by
tests as fixture factories. Rows are flushed (so they have IDs) but never
committed here.
"""
import logging
from datetime import date
from typing import List, Optional
from uuid import uuid4

from sqlmodel import Session

from ringside.models.event import Event
from ringside.models.match_decision import MatchDecision
from ringside.models.match_type import MatchType
from ringside.models.referee import Referee
from ringside.models.stipulation import Stipulation
from ringside.models.title import Title
from ringside.models.wrestler import Wrestler
from ringside.utils.slugs import slugify

logger = logging.getLogger(__name__)


def _suffix() -> str:
    return uuid4().hex[:8]


def _save(session: Session, row):
    session.add(row)
    session.flush()
    return row


def create_wrestler(session: Session, name: Optional[str] = None, hired_at: Optional[date] = None) -> Wrestler:
    name = name or f"Wrestler {_suffix()}"
    wrestler = Wrestler(name=name, slug=slugify(name), hired_at=hired_at or date.today())
    return _save(session, wrestler)


def create_wrestlers(session: Session, count: int, hired_at: Optional[date] = None) -> List[Wrestler]:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    wrestlers = [create_wrestler(session, hired_at=hired_at) for _ in range(count)]
    if wrestlers:
        logger.debug("Synthesized %d wrestlers hired %s", count, hired_at)
    return wrestlers


def create_referee(
    session: Session,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    hired_at: Optional[date] = None,
) -> Referee:
    referee = Referee(
        first_name=first_name or "Referee",
        last_name=last_name or _suffix().upper(),
        hired_at=hired_at or date.today(),
    )
    return _save(session, referee)


def create_referees(session: Session, count: int, hired_at: Optional[date] = None) -> List[Referee]:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    referees = [create_referee(session, hired_at=hired_at) for _ in range(count)]
    if referees:
        logger.debug("Synthesized %d referees hired %s", count, hired_at)
    return referees


def create_event(session: Session, event_date: Optional[date] = None, name: Optional[str] = None) -> Event:
    event_date = event_date or date.today()
    name = name or f"Event {event_date.isoformat()} {_suffix()}"
    return _save(session, Event(name=name, slug=slugify(name), date=event_date))


def create_match_type(
    session: Session,
    total_competitors: int = 2,
    number_of_sides: int = 2,
    multiple_referees: bool = False,
    name: Optional[str] = None,
) -> MatchType:
    name = name or f"{total_competitors}-Way {_suffix()}"
    match_type = MatchType(
        name=name,
        slug=slugify(name),
        total_competitors=total_competitors,
        number_of_sides=number_of_sides,
        multiple_referees=multiple_referees,
    )
    return _save(session, match_type)


def create_stipulation(session: Session, name: Optional[str] = None) -> Stipulation:
    name = name or f"Stipulation {_suffix()}"
    return _save(session, Stipulation(name=name, slug=slugify(name)))


def create_match_decision(session: Session, name: Optional[str] = None) -> MatchDecision:
    name = name or f"Decision {_suffix()}"
    return _save(session, MatchDecision(name=name, slug=slugify(name)))


def create_title(session: Session, introduced_at: Optional[date] = None, name: Optional[str] = None) -> Title:
    name = name or f"Title {_suffix()}"
    return _save(session, Title(name=name, slug=slugify(name), introduced_at=introduced_at or date.today()))
