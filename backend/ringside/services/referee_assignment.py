"""
Referee Assignment

A match needs exactly one referee, or two when its match type needs multiple
referees. Candidates are attached as given; any shortfall is synthesized
through the roster factory.
"""
import logging
from typing import Iterable, List

from sqlmodel import Session

from ringside.errors import OverAssignmentError
from ringside.models.match import Match
from ringside.models.referee import Referee
from ringside.services.match_associations import add_referees
from ringside.services.roster_factory import create_referees
from ringside.utils.dates import subtract_months

logger = logging.getLogger(__name__)

REFEREE_HIRE_MONTHS_BEFORE_MATCH = 2


def assign_referees(session: Session, match: Match, candidates: Iterable[Referee] = ()) -> List[Referee]:
    """
    Attach the required number of referees to match.

    Candidates already on the match are skipped.

    Raises OverAssignmentError (attaching nothing) when the referees already on
    the match plus the candidates exceed the requirement, or when the match is
    already fully staffed. Calling this twice on one match therefore raises.

    Returns the referees attached by this call.
    """
    attached_ids = {r.id for r in match.referees}
    unique: List[Referee] = []
    seen = set()
    for referee in candidates:
        if referee.id is not None and referee.id in attached_ids:
            continue
        key = referee.id if referee.id is not None else id(referee)
        if key not in seen:
            seen.add(key)
            unique.append(referee)

    required = match.match_type.required_referees()
    already_attached = len(match.referees)
    requested = already_attached + len(unique)

    if already_attached >= required or requested > required:
        logger.warning(
            "Referee over-assignment on match %s: requires %d, attached %d, candidates %d",
            match.id,
            required,
            already_attached,
            len(unique),
        )
        raise OverAssignmentError(match.id, required, requested)

    shortfall = required - requested
    if shortfall:
        hired_at = subtract_months(match.event.date, REFEREE_HIRE_MONTHS_BEFORE_MATCH)
        unique.extend(create_referees(session, shortfall, hired_at=hired_at))

    for referee in unique:
        if referee.id is None:
            session.add(referee)
    session.flush()

    add_referees(session, match, unique)
    logger.info("Assigned %d referees to match %s (%d synthesized)", len(unique), match.id, shortfall)
    return unique
