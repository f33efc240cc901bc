"""
Outcome Recording

Winners and losers are replaced (sync semantics), never appended, and must be
disjoint subsets of the wrestlers booked in the match.

Title changes are not a side effect of set_winners. The calling workflow runs
record_title_change explicitly once the winners are in.
"""
import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from sqlmodel import Session

from ringside.errors import InvariantViolation
from ringside.models.championship import Championship
from ringside.models.match import Match
from ringside.models.match_decision import MatchDecision
from ringside.models.wrestler import Wrestler
from ringside.services.championships import close_championship, current_champion, open_championship
from ringside.services.match_associations import is_title_match

logger = logging.getLogger(__name__)


def _dedupe(ids: Iterable[int]) -> List[int]:
    result = []
    for wrestler_id in ids:
        if wrestler_id not in result:
            result.append(wrestler_id)
    return result


def _validated_wrestlers(match: Match, wrestler_ids: List[int], opposite: List[Wrestler], label: str) -> List[Wrestler]:
    participants = {link.wrestler_id: link.wrestler for link in match.wrestler_links}

    outsiders = [wid for wid in wrestler_ids if wid not in participants]
    if outsiders:
        logger.warning("Match %s: %s %s are not booked in the match", match.id, label, outsiders)
        raise InvariantViolation(
            f"Wrestlers {outsiders} are not participants in match {match.id}",
            code="NOT_A_PARTICIPANT",
        )

    overlap = sorted(set(wrestler_ids) & {w.id for w in opposite})
    if overlap:
        logger.warning("Match %s: %s %s overlap the other outcome set", match.id, label, overlap)
        raise InvariantViolation(
            f"Wrestlers {overlap} cannot be both winners and losers of match {match.id}",
            code="WINNERS_LOSERS_OVERLAP",
        )

    return [participants[wid] for wid in wrestler_ids]


def set_winners(session: Session, match: Match, wrestler_ids: Iterable[int]) -> Match:
    ids = _dedupe(wrestler_ids)
    match.winners = _validated_wrestlers(match, ids, match.losers, "winners")
    session.add(match)
    session.flush()
    logger.info("Match %s winners set to %s", match.id, ids)
    return match


def set_losers(session: Session, match: Match, wrestler_ids: Iterable[int]) -> Match:
    ids = _dedupe(wrestler_ids)
    match.losers = _validated_wrestlers(match, ids, match.winners, "losers")
    session.add(match)
    session.flush()
    logger.info("Match %s losers set to %s", match.id, ids)
    return match


def record_result(
    session: Session,
    match: Match,
    decision: Optional[MatchDecision] = None,
    result: Optional[str] = None,
) -> Match:
    if decision is not None:
        match.decision = decision
    if result is not None:
        match.result = result
    session.add(match)
    session.flush()
    return match


def record_title_change(session: Session, match: Match) -> List[Championship]:
    """
    Move every title on match to its winner.

    For each title: a winner who already holds it gets a successful defense;
    otherwise the open reign is closed on the match date and a new reign is
    opened for the winner. Titles can have only one open reign, so a title
    match must have exactly one winner.

    Runs once per match, and only once the match date has arrived; the match
    is stamped with titles_changed_at so a second run is refused.

    Returns the reigns opened by this call.
    """
    if not is_title_match(match):
        return []

    if match.titles_changed_at is not None:
        raise InvariantViolation(
            f"Titles for match {match.id} were already changed at {match.titles_changed_at}",
            code="TITLES_ALREADY_CHANGED",
        )

    match_date = match.event.date
    if match_date > date.today():
        raise InvariantViolation(
            f"Match {match.id} is scheduled for {match_date} and has not been played",
            code="MATCH_NOT_PLAYED",
        )

    winners = list(match.winners)
    if len(winners) != 1:
        raise InvariantViolation(
            f"Title match {match.id} needs exactly one winner to change titles, has {len(winners)}",
            code="TITLE_CHANGE_WINNERS",
        )
    winner = winners[0]

    opened = []
    for title in match.titles:
        incumbent = current_champion(session, title)
        if incumbent is not None and incumbent.wrestler_id == winner.id:
            incumbent.successful_defenses += 1
            session.add(incumbent)
            session.flush()
            logger.info("Wrestler %s retained title %s in match %s", winner.id, title.id, match.id)
            continue

        if incumbent is not None:
            close_championship(session, incumbent, match_date)
        opened.append(open_championship(session, title, winner, match_date, won_in_match_id=match.id))

    match.titles_changed_at = datetime.utcnow()
    session.add(match)
    session.flush()
    return opened
