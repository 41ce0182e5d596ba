import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateIdentity, StoreFailure, TeamNotFound
from app.models.player import Player
from app.models.team import Team

logger = logging.getLogger(__name__)


class TeamRegistry:
    """Teams and their live squads."""

    def __init__(self, db: Session):
        self.db = db

    def create_team(self, name: str) -> Team:
        # Ids come from the database only, callers never pick them
        team = Team(name=name)
        try:
            self.db.add(team)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateIdentity("Team already exists")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to store team name=%s", name)
            raise StoreFailure()

        self.db.refresh(team)
        logger.info("Created team id=%s name=%s", team.id, name)
        return team

    def find_team(self, team_id: int) -> Team:
        team = self.db.get(Team, team_id)
        if team is None:
            raise TeamNotFound(f"Team {team_id} not found")
        return team

    def current_squad(self, team_id: int) -> List[Player]:
        """Players currently on the team, in the order they were created"""
        return list(self.find_team(team_id).players)
