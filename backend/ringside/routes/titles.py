from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from ringside.database import get_session
from ringside.errors import InvariantViolation
from ringside.models.title import Title
from ringside.services.championships import current_champion, title_history

router = APIRouter()


class ChampionshipResponse(BaseModel):
    id: int
    title_id: int
    wrestler_id: int
    won_on: date
    lost_on: Optional[date] = None
    successful_defenses: int = 0
    won_in_match_id: Optional[int] = None

    class Config:
        from_attributes = True


def _get_title(session: Session, title_id: int) -> Title:
    title = session.get(Title, title_id)
    if not title or title.deleted_at is not None:
        raise HTTPException(status_code=404, detail="Title not found")
    return title


@router.get("/titles/{title_id}/current-champion", response_model=Optional[ChampionshipResponse])
def get_current_champion(title_id: int, session: Session = Depends(get_session)):
    """Open reign for the title, or null when vacant"""
    title = _get_title(session, title_id)
    try:
        return current_champion(session, title)
    except InvariantViolation as exc:
        raise HTTPException(status_code=422, detail={"code": exc.code, "message": exc.message})


@router.get("/titles/{title_id}/history", response_model=List[ChampionshipResponse])
def get_title_history(title_id: int, session: Session = Depends(get_session)):
    """All reigns, oldest first"""
    title = _get_title(session, title_id)
    return title_history(session, title)
