from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field

from app.api.auth import get_current_admin
from app.core.database import get_db
from app.models.admin import Admin
from app.models.player import PlayerRole
from app.services.roster import RosterDirectory
from app.services.teams import TeamRegistry

router = APIRouter()

class SquadAddRequest(BaseModel):
    name: str = Field(..., min_length=1)
    role: PlayerRole

class SquadAddResponse(BaseModel):
    message: str = "Player added to squad successfully"
    player_id: int

class SquadPlayerResponse(BaseModel):
    id: int
    name: str
    role: str

    class Config:
        from_attributes = True

class SquadResponse(BaseModel):
    team_id: int
    name: str
    players: List[SquadPlayerResponse] = []

@router.post("/{team_id}/squad", response_model=SquadAddResponse)
def add_player_to_squad(
    team_id: int,
    payload: SquadAddRequest,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Create a new player directly on the team's squad"""
    player = RosterDirectory(db).add_player_to_team_squad(team_id, payload.name, payload.role.value)
    return SquadAddResponse(player_id=player.id)

@router.get("/{team_id}/squad", response_model=SquadResponse)
def get_squad(team_id: int, db: Session = Depends(get_db)):
    """Current (live) squad of a team"""
    registry = TeamRegistry(db)
    team = registry.find_team(team_id)
    return SquadResponse(
        team_id=team.id,
        name=team.name,
        players=[SquadPlayerResponse.model_validate(p) for p in registry.current_squad(team_id)],
    )
