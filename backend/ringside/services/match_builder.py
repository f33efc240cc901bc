"""
Match Roster Builder

Assembles a fully populated Match from a partial request: explicit event,
match type, stipulation, wrestlers, titles and referees are used as given;
everything missing is resolved or synthesized.

A MatchBuilder is bound to one Session and created per construction request.
build() runs as one transaction: nothing is visible unless every step
succeeds, and the builder resets itself afterwards for reuse.

Usage:
    match = (
        MatchBuilder(session)
        .with_match_type(tag_match)
        .with_title(tag_titles)
        .with_champion(incumbent)
        .scheduled()
        .build()
    )
"""
import logging
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from sqlmodel import Session

from ringside.errors import InvariantViolation
from ringside.models.event import Event
from ringside.models.match import Match
from ringside.models.match_decision import MatchDecision
from ringside.models.match_type import MatchType
from ringside.models.referee import Referee
from ringside.models.stipulation import Stipulation
from ringside.models.title import Title
from ringside.models.wrestler import Wrestler
from ringside.services.championships import open_championship
from ringside.services.match_associations import add_titles, add_wrestlers, next_match_number, split_into_sides
from ringside.services.referee_assignment import assign_referees
from ringside.services.roster_factory import create_event, create_match_type, create_wrestlers
from ringside.utils.dates import subtract_months, tomorrow, yesterday

logger = logging.getLogger(__name__)

CHAMPION_WON_MONTHS_BEFORE_INTRODUCTION = 4
WRESTLER_HIRE_MONTHS_BEFORE_MATCH = 2


class MatchTiming(str, Enum):
    scheduled = "scheduled"  # event tomorrow
    past = "past"  # event yesterday
    explicit = "explicit"  # caller-supplied date


def _identity(row) -> tuple:
    return ("id", row.id) if row.id is not None else ("obj", id(row))


def _append_unique(rows: list, new_rows: Iterable) -> None:
    seen = {_identity(r) for r in rows}
    for row in new_rows:
        key = _identity(row)
        if key not in seen:
            seen.add(key)
            rows.append(row)


class MatchBuilder:
    def __init__(self, session: Session):
        self.session = session
        self._reset()

    def _reset(self) -> None:
        self.event: Optional[Event] = None
        self.match_type: Optional[MatchType] = None
        self.stipulation: Optional[Stipulation] = None
        self.decision: Optional[MatchDecision] = None
        self.match_number: Optional[int] = None
        self.event_date: Optional[date] = None
        self.wrestlers: List[Wrestler] = []
        self.titles: List[Title] = []
        self.referees: List[Referee] = []

    # ── Configuration (no storage access) ───────────────────────────────

    def configure(
        self,
        event: Optional[Event] = None,
        match_type: Optional[MatchType] = None,
        stipulation: Optional[Stipulation] = None,
        wrestlers: Iterable[Wrestler] = (),
        titles: Iterable[Title] = (),
        timing: Optional[MatchTiming] = None,
        event_date: Optional[date] = None,
    ) -> "MatchBuilder":
        if event is not None:
            self.for_event(event)
        if match_type is not None:
            self.with_match_type(match_type)
        if stipulation is not None:
            self.with_stipulation(stipulation)
        self.with_wrestlers(wrestlers)
        self.with_titles(titles)

        if timing is not None:
            timing = MatchTiming(timing)
            if timing is MatchTiming.scheduled:
                self.scheduled()
            elif timing is MatchTiming.past:
                self.past()
            else:
                if event_date is None:
                    raise ValueError("event_date is required for explicit timing")
                self.on_date(event_date)
        elif event_date is not None:
            self.on_date(event_date)
        return self

    def for_event(self, event: Event) -> "MatchBuilder":
        self.event = event
        return self

    def for_match_number(self, match_number: int) -> "MatchBuilder":
        self.match_number = match_number
        return self

    def with_match_type(self, match_type: MatchType) -> "MatchBuilder":
        self.match_type = match_type
        return self

    def with_stipulation(self, stipulation: Stipulation) -> "MatchBuilder":
        self.stipulation = stipulation
        return self

    def with_decision(self, decision: MatchDecision) -> "MatchBuilder":
        self.decision = decision
        return self

    def with_wrestler(self, wrestler: Wrestler) -> "MatchBuilder":
        return self.with_wrestlers([wrestler])

    def with_wrestlers(self, wrestlers: Iterable[Wrestler]) -> "MatchBuilder":
        _append_unique(self.wrestlers, wrestlers)
        return self

    def with_title(self, title: Title) -> "MatchBuilder":
        return self.with_titles([title])

    def with_titles(self, titles: Iterable[Title]) -> "MatchBuilder":
        _append_unique(self.titles, titles)
        return self

    def with_referee(self, referee: Referee) -> "MatchBuilder":
        return self.with_referees([referee])

    def with_referees(self, referees: Iterable[Referee]) -> "MatchBuilder":
        _append_unique(self.referees, referees)
        return self

    def scheduled(self) -> "MatchBuilder":
        self.event_date = tomorrow()
        return self

    def past(self) -> "MatchBuilder":
        self.event_date = yesterday()
        return self

    def on_date(self, event_date: date) -> "MatchBuilder":
        self.event_date = event_date
        return self

    # ── Championship seeding ────────────────────────────────────────────

    def with_champion(self, wrestler: Wrestler) -> "MatchBuilder":
        """
        Make wrestler the incumbent of every title configured so far and add
        them to the match. Writes the reigns immediately (flushed, committed
        with the build), so call it after with_title(s).
        """
        if wrestler.id is None:
            self.session.add(wrestler)
            self.session.flush()

        for title in self.titles:
            won_on = subtract_months(title.introduced_at, CHAMPION_WON_MONTHS_BEFORE_INTRODUCTION)
            open_championship(self.session, title, wrestler, won_on)

        return self.with_wrestler(wrestler)

    # ── Build ───────────────────────────────────────────────────────────

    def build(self) -> Match:
        session = self.session
        try:
            event = self._resolve_event()
            match_type = self.match_type or create_match_type(session)
            self._check_roster_fits(match_type)

            match = Match(
                event=event,
                match_type=match_type,
                stipulation=self.stipulation,
                decision=self.decision,
                match_number=self.match_number or next_match_number(session, event.id),
            )
            session.add(match)
            session.flush()

            self._add_wrestlers_for_match(match, match_type, event)
            if self.titles:
                add_titles(session, match, self.titles)
            assign_referees(session, match, self.referees)

            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            self._reset()

        session.refresh(match)
        logger.info(
            "Built match %s (#%d) for event %s: type=%s wrestlers=%d titles=%d",
            match.id,
            match.match_number,
            match.event_id,
            match.match_type_id,
            len(match.wrestler_links),
            len(match.titles),
        )
        return match

    def _resolve_event(self) -> Event:
        if self.event is not None:
            if self.event.id is None:
                self.session.add(self.event)
                self.session.flush()
            return self.event
        return create_event(self.session, event_date=self.event_date or date.today())

    def _check_roster_fits(self, match_type: MatchType) -> None:
        total = match_type.total_competitors
        sides = match_type.number_of_sides
        if sides < 1 or sides > total:
            raise InvariantViolation(
                f"Match type {match_type.id} cannot split {total} competitors into {sides} sides",
                code="BAD_SIDE_LAYOUT",
            )
        if len(self.wrestlers) > total:
            logger.warning(
                "Match type %s takes %d competitors, %d supplied", match_type.id, total, len(self.wrestlers)
            )
            raise InvariantViolation(
                f"Match type {match_type.id} takes {total} competitors, {len(self.wrestlers)} supplied",
                code="TOO_MANY_WRESTLERS",
            )

    def _add_wrestlers_for_match(self, match: Match, match_type: MatchType, event: Event) -> None:
        shortfall = match_type.total_competitors - len(self.wrestlers)
        if shortfall > 0:
            hired_at = subtract_months(event.date, WRESTLER_HIRE_MONTHS_BEFORE_MATCH)
            self.wrestlers.extend(create_wrestlers(self.session, shortfall, hired_at=hired_at))

        for wrestler in self.wrestlers:
            if wrestler.id is None:
                self.session.add(wrestler)
        self.session.flush()

        sides = split_into_sides(self.wrestlers, match_type.number_of_sides)
        add_wrestlers(self.session, match, dict(enumerate(sides)))
