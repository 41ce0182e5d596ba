from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field

from app.api.auth import get_current_admin
from app.core.database import get_db
from app.models.admin import Admin
from app.models.player import Player
from app.services.roster import RosterDirectory

router = APIRouter()

class PlayerStatsResponse(BaseModel):
    player_id: int
    name: str
    matches_played: Optional[int]
    runs: Optional[int]
    average: Optional[float]
    strike_rate: Optional[float]

class PlayerStatsUpdate(BaseModel):
    matches_played: Optional[int] = Field(None, ge=0)
    runs: Optional[int] = Field(None, ge=0)
    average: Optional[float] = Field(None, ge=0)
    strike_rate: Optional[float] = Field(None, ge=0)

    class Config:
        extra = "forbid"

def _stats(player: Player) -> PlayerStatsResponse:
    return PlayerStatsResponse(
        player_id=player.id,
        name=player.name,
        matches_played=player.matches_played,
        runs=player.runs,
        average=player.average,
        strike_rate=player.strike_rate,
    )

@router.get("/{player_id}/stats", response_model=PlayerStatsResponse)
def get_player_stats(player_id: int, db: Session = Depends(get_db)):
    return _stats(RosterDirectory(db).get_stats(player_id))

@router.patch("/{player_id}/stats", response_model=PlayerStatsResponse)
def update_player_stats(
    player_id: int,
    payload: PlayerStatsUpdate,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Record stats; fields left out of the body keep their stored value"""
    player = RosterDirectory(db).update_stats(player_id, **payload.model_dump(exclude_unset=True))
    return _stats(player)
