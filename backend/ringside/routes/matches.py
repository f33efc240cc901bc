"""
Match endpoints: build a match, read the associated match graph, assign
referees, record outcomes and run the title-change workflow.

Each handler owns its transaction: services flush, the handler commits, and
domain errors roll back before being mapped to HTTP errors.
"""
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, model_validator
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from ringside.database import get_session
from ringside.errors import InvariantViolation, OverAssignmentError
from ringside.models.event import Event
from ringside.models.match import Match
from ringside.models.match_decision import MatchDecision
from ringside.models.match_type import MatchType
from ringside.models.referee import Referee
from ringside.models.stipulation import Stipulation
from ringside.models.title import Title
from ringside.models.wrestler import Wrestler
from ringside.routes.titles import ChampionshipResponse
from ringside.services.championships import titles_with_current_champions
from ringside.services.match_associations import grouped_wrestlers_by_side, is_title_match, matches_for_event
from ringside.services.match_builder import MatchBuilder, MatchTiming
from ringside.services.outcomes import record_result, record_title_change, set_losers, set_winners
from ringside.services.referee_assignment import assign_referees
from ringside.services.soft_delete import soft_delete

router = APIRouter()


class MatchBuildRequest(BaseModel):
    event_id: Optional[int] = None
    match_type_id: Optional[int] = None
    stipulation_id: Optional[int] = None
    match_number: Optional[int] = None
    wrestler_ids: List[int] = []
    title_ids: List[int] = []
    referee_ids: List[int] = []
    champion_id: Optional[int] = None
    timing: Optional[MatchTiming] = None
    event_date: Optional[date] = None

    @model_validator(mode="after")
    def validate_timing(self):
        if self.timing == MatchTiming.explicit and self.event_date is None:
            raise ValueError("event_date is required when timing is explicit")
        return self


class RefereeAssignmentRequest(BaseModel):
    referee_ids: List[int] = []


class OutcomeRequest(BaseModel):
    wrestler_ids: List[int]


class ResultRequest(BaseModel):
    match_decision_id: Optional[int] = None
    result: Optional[str] = None


class WrestlerSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class RefereeSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    full_name: str

    class Config:
        from_attributes = True


class NamedSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class EventSummary(BaseModel):
    id: int
    name: str
    date: date

    class Config:
        from_attributes = True


class MatchTypeSummary(BaseModel):
    id: int
    name: str
    total_competitors: int
    number_of_sides: int
    multiple_referees: bool

    class Config:
        from_attributes = True


class MatchTitleState(BaseModel):
    id: int
    name: str
    current_champion: Optional[ChampionshipResponse] = None


class MatchDetail(BaseModel):
    id: int
    match_number: int
    event: EventSummary
    match_type: MatchTypeSummary
    stipulation: Optional[NamedSummary] = None
    decision: Optional[NamedSummary] = None
    preview: Optional[str] = None
    result: Optional[str] = None
    sides: Dict[int, List[WrestlerSummary]]
    referees: List[RefereeSummary]
    titles: List[MatchTitleState]
    is_title_match: bool
    winner_ids: List[int]
    loser_ids: List[int]


def _match_to_detail(session: Session, match: Match) -> MatchDetail:
    titles = [
        MatchTitleState(
            id=title.id,
            name=title.name,
            current_champion=ChampionshipResponse.model_validate(reign) if reign else None,
        )
        for title, reign in titles_with_current_champions(session, match)
    ]
    return MatchDetail(
        id=match.id,
        match_number=match.match_number,
        event=EventSummary.model_validate(match.event),
        match_type=MatchTypeSummary.model_validate(match.match_type),
        stipulation=NamedSummary.model_validate(match.stipulation) if match.stipulation else None,
        decision=NamedSummary.model_validate(match.decision) if match.decision else None,
        preview=match.preview,
        result=match.result,
        sides={
            side: [WrestlerSummary.model_validate(w) for w in wrestlers]
            for side, wrestlers in grouped_wrestlers_by_side(match).items()
        },
        referees=[RefereeSummary.model_validate(r) for r in match.referees],
        titles=titles,
        is_title_match=is_title_match(match),
        winner_ids=sorted(w.id for w in match.winners),
        loser_ids=sorted(w.id for w in match.losers),
    )


def _get_or_404(session: Session, model, row_id: int, label: str):
    row = session.get(model, row_id)
    if not row or getattr(row, "deleted_at", None) is not None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row


def _domain_error(session: Session, exc: Exception) -> HTTPException:
    session.rollback()
    if isinstance(exc, OverAssignmentError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=422, detail={"code": exc.code, "message": exc.message})


@router.post("/matches", response_model=MatchDetail, status_code=201)
def build_match(payload: MatchBuildRequest, session: Session = Depends(get_session)):
    """Build a match; anything not supplied is created."""
    builder = MatchBuilder(session).configure(
        event=_get_or_404(session, Event, payload.event_id, "Event") if payload.event_id else None,
        match_type=_get_or_404(session, MatchType, payload.match_type_id, "Match type")
        if payload.match_type_id
        else None,
        stipulation=_get_or_404(session, Stipulation, payload.stipulation_id, "Stipulation")
        if payload.stipulation_id
        else None,
        wrestlers=[_get_or_404(session, Wrestler, wid, "Wrestler") for wid in payload.wrestler_ids],
        titles=[_get_or_404(session, Title, tid, "Title") for tid in payload.title_ids],
        timing=payload.timing,
        event_date=payload.event_date,
    )
    builder.with_referees([_get_or_404(session, Referee, rid, "Referee") for rid in payload.referee_ids])
    if payload.match_number is not None:
        builder.for_match_number(payload.match_number)

    try:
        if payload.champion_id is not None:
            builder.with_champion(_get_or_404(session, Wrestler, payload.champion_id, "Wrestler"))
        match = builder.build()
    except (OverAssignmentError, InvariantViolation) as exc:
        raise _domain_error(session, exc)
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=409, detail="Match number already taken for this event")

    return _match_to_detail(session, match)


@router.get("/matches/{match_id}", response_model=MatchDetail)
def get_match(match_id: int, session: Session = Depends(get_session)):
    """Read-only match graph for display"""
    match = _get_or_404(session, Match, match_id, "Match")
    return _match_to_detail(session, match)


@router.get("/events/{event_id}/matches", response_model=List[MatchDetail])
def get_event_matches(event_id: int, session: Session = Depends(get_session)):
    """Matches on an event card in running order"""
    event = _get_or_404(session, Event, event_id, "Event")
    return [_match_to_detail(session, m) for m in matches_for_event(session, event)]


@router.delete("/matches/{match_id}", status_code=204)
def delete_match(match_id: int, session: Session = Depends(get_session)):
    match = _get_or_404(session, Match, match_id, "Match")
    soft_delete(session, match)
    session.commit()
    return Response(status_code=204)


@router.post("/matches/{match_id}/referees", response_model=MatchDetail)
def assign_match_referees(
    match_id: int, payload: RefereeAssignmentRequest, session: Session = Depends(get_session)
):
    """Attach referees; missing ones are created. 409 if the match would be over-staffed."""
    match = _get_or_404(session, Match, match_id, "Match")
    candidates = [_get_or_404(session, Referee, rid, "Referee") for rid in payload.referee_ids]
    try:
        assign_referees(session, match, candidates)
    except OverAssignmentError as exc:
        raise _domain_error(session, exc)
    session.commit()
    session.refresh(match)
    return _match_to_detail(session, match)


@router.put("/matches/{match_id}/winners", response_model=MatchDetail)
def update_match_winners(match_id: int, payload: OutcomeRequest, session: Session = Depends(get_session)):
    """Replace the winners of a match"""
    match = _get_or_404(session, Match, match_id, "Match")
    try:
        set_winners(session, match, payload.wrestler_ids)
    except InvariantViolation as exc:
        raise _domain_error(session, exc)
    session.commit()
    session.refresh(match)
    return _match_to_detail(session, match)


@router.put("/matches/{match_id}/losers", response_model=MatchDetail)
def update_match_losers(match_id: int, payload: OutcomeRequest, session: Session = Depends(get_session)):
    """Replace the losers of a match"""
    match = _get_or_404(session, Match, match_id, "Match")
    try:
        set_losers(session, match, payload.wrestler_ids)
    except InvariantViolation as exc:
        raise _domain_error(session, exc)
    session.commit()
    session.refresh(match)
    return _match_to_detail(session, match)


@router.put("/matches/{match_id}/result", response_model=MatchDetail)
def update_match_result(match_id: int, payload: ResultRequest, session: Session = Depends(get_session)):
    match = _get_or_404(session, Match, match_id, "Match")
    decision = (
        _get_or_404(session, MatchDecision, payload.match_decision_id, "Match decision")
        if payload.match_decision_id
        else None
    )
    record_result(session, match, decision=decision, result=payload.result)
    session.commit()
    session.refresh(match)
    return _match_to_detail(session, match)


@router.post("/matches/{match_id}/title-change", response_model=List[ChampionshipResponse])
def change_titles(match_id: int, session: Session = Depends(get_session)):
    """Move the match's titles to its winner. Run after winners are recorded."""
    match = _get_or_404(session, Match, match_id, "Match")
    try:
        opened = record_title_change(session, match)
    except InvariantViolation as exc:
        raise _domain_error(session, exc)
    session.commit()
    for reign in opened:
        session.refresh(reign)
    return opened
