from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from app.core.database import get_db
from app.api.auth import get_current_admin
from app.models.admin import Admin
from app.models.match import Match, MatchStatus
from app.services.matches import MatchLedger

router = APIRouter()

class MatchCreate(BaseModel):
    team_1: int
    team_2: int
    date: datetime
    venue: str = Field(..., min_length=1)

class MatchCreatedResponse(BaseModel):
    message: str = "Match created successfully"
    match_id: int

class MatchSummary(BaseModel):
    match_id: int
    team_1: int
    team_2: int
    date: datetime
    venue: str

class MatchListResponse(BaseModel):
    matches: List[MatchSummary]

class SquadMember(BaseModel):
    id: int
    name: str
    role: str

class MatchSquads(BaseModel):
    team_1: List[SquadMember] = []
    team_2: List[SquadMember] = []

class MatchDetailResponse(BaseModel):
    match_id: int
    team_1: str
    team_2: str
    date: datetime
    venue: str
    status: MatchStatus
    squads: MatchSquads

class SquadConfirmRequest(BaseModel):
    team_1: List[int]
    team_2: List[int]

class StatusUpdateRequest(BaseModel):
    status: MatchStatus

def _detail(match: Match) -> MatchDetailResponse:
    # Team names are resolved live, squads come from the stored snapshot
    return MatchDetailResponse(
        match_id=match.id,
        team_1=match.team_1.name,
        team_2=match.team_2.name,
        date=match.date,
        venue=match.venue,
        status=match.status,
        squads=MatchSquads(**match.squads),
    )

@router.post("", response_model=MatchCreatedResponse)
def create_match(
    payload: MatchCreate,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Schedule a match between two existing, different teams"""
    match = MatchLedger(db).create_match(
        team_1_id=payload.team_1,
        team_2_id=payload.team_2,
        date=payload.date,
        venue=payload.venue,
    )
    return MatchCreatedResponse(match_id=match.id)

@router.get("", response_model=MatchListResponse)
def get_matches(db: Session = Depends(get_db)):
    """Summary of every match, without squads"""
    matches = MatchLedger(db).list_matches()
    return MatchListResponse(
        matches=[
            MatchSummary(
                match_id=m.id,
                team_1=m.team_1_id,
                team_2=m.team_2_id,
                date=m.date,
                venue=m.venue,
            )
            for m in matches
        ]
    )

@router.get("/{match_id}", response_model=MatchDetailResponse)
def get_match(match_id: int, db: Session = Depends(get_db)):
    """Match details with team names and the squad snapshot"""
    return _detail(MatchLedger(db).get_match_detail(match_id))

@router.put("/{match_id}/squads", response_model=MatchDetailResponse)
def confirm_squads(
    match_id: int,
    payload: SquadConfirmRequest,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    match = MatchLedger(db).confirm_squads(match_id, payload.team_1, payload.team_2)
    return _detail(match)

@router.post("/{match_id}/status", response_model=MatchDetailResponse)
def update_status(
    match_id: int,
    payload: StatusUpdateRequest,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    match = MatchLedger(db).advance_status(match_id, payload.status.value)
    return _detail(match)
