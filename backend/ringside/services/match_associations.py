"""
Match association helpers: attaching wrestlers (by side), referees, titles,
stipulations and events to a match, plus the read-side queries over matches.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select

from ringside.errors import InvariantViolation
from ringside.models.event import Event
from ringside.models.match import Match
from ringside.models.match_links import MatchWrestler
from ringside.models.referee import Referee
from ringside.models.stipulation import Stipulation
from ringside.models.title import Title
from ringside.models.wrestler import Wrestler

T = TypeVar("T")


def split_into_sides(items: Sequence[T], number_of_sides: int) -> List[List[T]]:
    """
    Split items into number_of_sides contiguous groups, keeping input order.

    Groups are as even as possible; the first len(items) % number_of_sides
    groups get one extra item. 6 items over 3 sides -> 2/2/2, 5 over 2 -> 3/2.
    """
    if number_of_sides < 1:
        raise ValueError(f"number_of_sides must be >= 1, got {number_of_sides}")

    base, extra = divmod(len(items), number_of_sides)
    groups: List[List[T]] = []
    start = 0
    for side in range(number_of_sides):
        size = base + (1 if side < extra else 0)
        groups.append(list(items[start : start + size]))
        start += size
    return groups


def add_wrestler(session: Session, match: Match, wrestler: Wrestler, side_number: int) -> MatchWrestler:
    number_of_sides = match.match_type.number_of_sides
    if not 0 <= side_number < number_of_sides:
        raise InvariantViolation(
            f"side_number {side_number} out of range for match {match.id} ({number_of_sides} sides)",
            code="SIDE_OUT_OF_RANGE",
        )
    if any(link.wrestler_id == wrestler.id for link in match.wrestler_links):
        raise InvariantViolation(
            f"Wrestler {wrestler.id} is already booked in match {match.id}",
            code="DUPLICATE_WRESTLER",
        )

    link = MatchWrestler(match=match, wrestler=wrestler, side_number=side_number)
    session.add(link)
    session.flush()
    return link


def add_wrestlers(session: Session, match: Match, grouped: Mapping[int, Iterable[Wrestler]]) -> List[MatchWrestler]:
    """Attach wrestlers given as {side_number: [wrestler, ...]}."""
    links = []
    for side_number in sorted(grouped):
        for wrestler in grouped[side_number]:
            links.append(add_wrestler(session, match, wrestler, side_number))
    return links


def add_referee(session: Session, match: Match, referee: Referee) -> None:
    add_referees(session, match, [referee])


def add_referees(session: Session, match: Match, referees: Iterable[Referee]) -> None:
    attached = {r.id for r in match.referees}
    for referee in referees:
        if referee.id not in attached:
            match.referees.append(referee)
            attached.add(referee.id)
    session.add(match)
    session.flush()


def add_title(session: Session, match: Match, title: Title) -> None:
    add_titles(session, match, [title])


def add_titles(session: Session, match: Match, titles: Iterable[Title]) -> None:
    attached = {t.id for t in match.titles}
    for title in titles:
        if title.id not in attached:
            match.titles.append(title)
            attached.add(title.id)
    session.add(match)
    session.flush()


def add_stipulation(session: Session, match: Match, stipulation: Stipulation) -> None:
    match.stipulation = stipulation
    session.add(match)
    session.flush()


def add_to_event(session: Session, match: Match, event: Event) -> None:
    match.event = event
    session.add(match)
    session.flush()


def is_title_match(match: Match) -> bool:
    return len(match.titles) > 0


def grouped_wrestlers_by_side(match: Match) -> Dict[int, List[Wrestler]]:
    grouped: Dict[int, List[Wrestler]] = defaultdict(list)
    for link in match.wrestler_links:
        grouped[link.side_number].append(link.wrestler)
    return dict(sorted(grouped.items()))


def match_date(match: Match) -> date:
    return match.event.date


def next_match_number(session: Session, event_id: int) -> int:
    # Soft-deleted matches still hold their number (unique per event)
    current = session.exec(select(func.max(Match.match_number)).where(Match.event_id == event_id)).first()
    return (current or 0) + 1


def matches_for_event(session: Session, event: Event) -> List[Match]:
    return session.exec(
        select(Match)
        .where(Match.event_id == event.id, Match.deleted_at.is_(None))
        .order_by(Match.match_number)
    ).all()


def match_with_number(session: Session, event: Event, match_number: int) -> Optional[Match]:
    return session.exec(
        select(Match).where(
            Match.event_id == event.id,
            Match.match_number == match_number,
            Match.deleted_at.is_(None),
        )
    ).first()


def matches_with_wrestler(session: Session, wrestler_id: int) -> List[Match]:
    return session.exec(
        select(Match)
        .join(MatchWrestler, MatchWrestler.match_id == Match.id)
        .join(Event, Event.id == Match.event_id)
        .where(MatchWrestler.wrestler_id == wrestler_id, Match.deleted_at.is_(None))
        .order_by(Event.date, Match.match_number)
    ).all()
