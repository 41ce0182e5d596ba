from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field

from app.api.auth import get_current_admin
from app.core.database import get_db
from app.models.admin import Admin
from app.models.player import PlayerRole
from app.services.roster import RosterDirectory
from app.services.teams import TeamRegistry

router = APIRouter()

class PlayerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    role: PlayerRole
    matches_played: Optional[int] = Field(None, ge=0)
    runs: Optional[int] = Field(None, ge=0)
    average: Optional[float] = Field(None, ge=0)
    strike_rate: Optional[float] = Field(None, ge=0)

class PlayerCreatedResponse(BaseModel):
    status: str = "Player successfully created"
    status_code: int = 200
    player_id: int

class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1)

    class Config:
        # Team ids are server-generated, a client-supplied id is an error
        extra = "forbid"

class TeamCreatedResponse(BaseModel):
    status: str = "Team created successfully"
    status_code: int = 201
    team_id: int

@router.post("/create-player", response_model=PlayerCreatedResponse)
def create_player(
    payload: PlayerCreate,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Create a player that is not (yet) on any team"""
    player = RosterDirectory(db).create_player(
        name=payload.name,
        role=payload.role.value,
        matches_played=payload.matches_played,
        runs=payload.runs,
        average=payload.average,
        strike_rate=payload.strike_rate,
    )
    return PlayerCreatedResponse(player_id=player.id)

@router.post("/create-team", response_model=TeamCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_team(
    payload: TeamCreate,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    team = TeamRegistry(db).create_team(payload.name)
    return TeamCreatedResponse(team_id=team.id)
