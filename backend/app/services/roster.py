import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import PlayerNotFound, StoreFailure
from app.models.player import Player
from app.services.teams import TeamRegistry

logger = logging.getLogger(__name__)

STAT_FIELDS = ("matches_played", "runs", "average", "strike_rate")


class RosterDirectory:
    """Players and team membership."""

    def __init__(self, db: Session, teams: Optional[TeamRegistry] = None):
        self.db = db
        self.teams = teams or TeamRegistry(db)

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to %s", action)
            raise StoreFailure()

    def create_player(
        self,
        name: str,
        role: str,
        matches_played: Optional[int] = None,
        runs: Optional[int] = None,
        average: Optional[float] = None,
        strike_rate: Optional[float] = None,
    ) -> Player:
        player = Player(
            name=name,
            role=role,
            matches_played=matches_played,
            runs=runs,
            average=average,
            strike_rate=strike_rate,
        )
        self.db.add(player)
        self._commit("create player")
        self.db.refresh(player)
        logger.info("Created player id=%s role=%s", player.id, player.role)
        return player

    def add_player_to_team_squad(self, team_id: int, name: str, role: str) -> Player:
        """
        Create a new player and put it on the team's squad.

        Always mints a new player, even if one with the same name exists.
        Player row and membership edge are committed together.

        Raises:
            TeamNotFound: team_id does not resolve, nothing is written
        """
        team = self.teams.find_team(team_id)

        player = Player(name=name, role=role)
        team.players.append(player)
        self._commit("add player to squad")
        self.db.refresh(player)
        logger.info("Added player id=%s to team id=%s", player.id, team_id)
        return player

    def get_stats(self, player_id: int) -> Player:
        player = self.db.get(Player, player_id)
        if player is None:
            raise PlayerNotFound()
        return player

    def update_stats(self, player_id: int, **stats) -> Player:
        """Overwrite only the stats fields that were passed"""
        unknown = set(stats) - set(STAT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown stats fields: {sorted(unknown)}")

        player = self.get_stats(player_id)
        for field, value in stats.items():
            setattr(player, field, value)
        self._commit("update player stats")
        self.db.refresh(player)
        return player
