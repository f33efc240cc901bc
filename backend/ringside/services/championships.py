"""
Title reign ledger.

Write path (open/close) enforces at most one open Championship per Title.
Read path replaces eager "current champion" loading with explicit queries.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import and_
from sqlmodel import Session, select

from ringside.errors import InvariantViolation
from ringside.models.championship import Championship
from ringside.models.match import Match
from ringside.models.match_links import MatchTitle
from ringside.models.title import Title
from ringside.models.wrestler import Wrestler

logger = logging.getLogger(__name__)


def open_reigns(session: Session, title: Title) -> List[Championship]:
    return session.exec(
        select(Championship)
        .where(Championship.title_id == title.id, Championship.lost_on.is_(None))
        .order_by(Championship.won_on.desc(), Championship.id.desc())
    ).all()


def current_champion(session: Session, title: Title) -> Optional[Championship]:
    """The open reign for title, or None if vacant."""
    reigns = open_reigns(session, title)
    if len(reigns) > 1:
        logger.warning("Title %s has %d open reigns", title.id, len(reigns))
        raise InvariantViolation(
            f"Title {title.id} has {len(reigns)} open championships",
            code="MULTIPLE_OPEN_REIGNS",
        )
    return reigns[0] if reigns else None


def open_championship(
    session: Session,
    title: Title,
    wrestler: Wrestler,
    won_on: date,
    won_in_match_id: Optional[int] = None,
) -> Championship:
    incumbent = current_champion(session, title)
    if incumbent is not None:
        raise InvariantViolation(
            f"Title {title.id} is already held by wrestler {incumbent.wrestler_id}",
            code="TITLE_ALREADY_HELD",
        )

    championship = Championship(
        title_id=title.id, wrestler_id=wrestler.id, won_on=won_on, won_in_match_id=won_in_match_id
    )
    session.add(championship)
    session.flush()
    logger.info("Wrestler %s won title %s on %s", wrestler.id, title.id, won_on)
    return championship


def close_championship(session: Session, championship: Championship, lost_on: date) -> Championship:
    if not championship.is_open:
        raise InvariantViolation(f"Championship {championship.id} is already closed", code="REIGN_CLOSED")
    if lost_on < championship.won_on:
        raise InvariantViolation(
            f"Championship {championship.id} cannot end ({lost_on}) before it began ({championship.won_on})",
            code="REIGN_DATES",
        )

    championship.lost_on = lost_on
    session.add(championship)
    session.flush()
    logger.info(
        "Wrestler %s lost title %s on %s", championship.wrestler_id, championship.title_id, lost_on
    )
    return championship


def title_history(session: Session, title: Title) -> List[Championship]:
    return session.exec(
        select(Championship)
        .where(Championship.title_id == title.id)
        .order_by(Championship.won_on, Championship.id)
    ).all()


def titles_with_current_champions(session: Session, match: Match) -> List[Tuple[Title, Optional[Championship]]]:
    """Titles on the match, each paired with its open reign (None when vacant)."""
    rows = session.exec(
        select(Title, Championship)
        .join(MatchTitle, MatchTitle.title_id == Title.id)
        .outerjoin(
            Championship,
            and_(Championship.title_id == Title.id, Championship.lost_on.is_(None)),
        )
        .where(MatchTitle.match_id == match.id)
        .order_by(Title.id)
    ).all()
    return [(title, championship) for title, championship in rows]


def group_champions_by_title(championships: Iterable[Championship]) -> Dict[int, List[Championship]]:
    grouped: Dict[int, List[Championship]] = defaultdict(list)
    for championship in championships:
        grouped[championship.title_id].append(championship)
    return dict(grouped)
