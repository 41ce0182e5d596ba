from app.models.admin import Admin
from app.models.player import Player, PlayerRole
from app.models.team import Team, team_players
from app.models.match import Match, MatchStatus

__all__ = [
    "Admin",
    "Player",
    "PlayerRole",
    "Team",
    "team_players",
    "Match",
    "MatchStatus",
]
