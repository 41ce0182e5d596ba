import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import InvalidMatch, InvalidSquad, InvalidStatusTransition, MatchNotFound, StoreFailure
from app.models.match import Match, MatchStatus, STATUS_ORDER, empty_squads
from app.models.team import Team
from app.services.teams import TeamRegistry

logger = logging.getLogger(__name__)


class MatchLedger:
    """Scheduled matches and their squad snapshots."""

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

    def create_match(self, team_1_id: int, team_2_id: int, date: datetime, venue: str) -> Match:
        """
        Schedule a match between two existing teams.

        Raises:
            InvalidMatch: both ids name the same team
            TeamNotFound: either team does not exist
        """
        if team_1_id == team_2_id:
            raise InvalidMatch()
        self.teams.find_team(team_1_id)
        self.teams.find_team(team_2_id)

        match = Match(
            team_1_id=team_1_id,
            team_2_id=team_2_id,
            date=date,
            venue=venue,
            status=MatchStatus.UPCOMING.value,
            squads=empty_squads(),
        )
        self.db.add(match)
        self._commit("create match")
        self.db.refresh(match)
        logger.info("Created match id=%s teams=%s/%s", match.id, team_1_id, team_2_id)
        return match

    def list_matches(self) -> List[Match]:
        return self.db.query(Match).order_by(Match.id).all()

    def get_match_detail(self, match_id: int) -> Match:
        match = self.db.get(Match, match_id)
        if match is None:
            raise MatchNotFound()
        return match

    def locked_match_query(self, match_id: int):
        """
        Match row selected FOR UPDATE.

        Squad confirmation and status changes read the status and then write,
        the row lock keeps the two from interleaving. SQLite has no row locks
        and serialises writers instead.
        """
        return (
            self.db.query(Match)
            .filter(Match.id == match_id)
            .with_for_update()
            .populate_existing()
        )

    def _get_locked(self, match_id: int) -> Match:
        match = self.locked_match_query(match_id).first()
        if match is None:
            raise MatchNotFound()
        return match

    def _snapshot(self, team: Team, player_ids: Sequence[int]) -> list:
        if len(set(player_ids)) != len(player_ids):
            raise InvalidSquad(f"Duplicate players in squad for team {team.id}")

        members = {player.id: player for player in team.players}
        outsiders = [pid for pid in player_ids if pid not in members]
        if outsiders:
            raise InvalidSquad(f"Players {outsiders} are not members of team {team.id}")

        return [members[pid].summary() for pid in player_ids]

    def confirm_squads(
        self,
        match_id: int,
        team_1_player_ids: Sequence[int],
        team_2_player_ids: Sequence[int],
    ) -> Match:
        """
        Freeze each team's squad for this match.

        Every player must be on the corresponding team right now. What gets
        stored is a copy, so later roster changes leave the match untouched.

        Raises:
            MatchNotFound: match_id does not resolve
            InvalidSquad: duplicates, non-members, or the match has started
        """
        match = self._get_locked(match_id)
        if match.status != MatchStatus.UPCOMING.value:
            raise InvalidSquad("Squads can only be confirmed before the match starts")

        match.squads = {
            "team_1": self._snapshot(match.team_1, team_1_player_ids),
            "team_2": self._snapshot(match.team_2, team_2_player_ids),
        }
        self._commit("confirm squads")
        self.db.refresh(match)
        logger.info("Confirmed squads for match id=%s", match_id)
        return match

    def advance_status(self, match_id: int, new_status: str) -> Match:
        """Move a match one step along upcoming -> live -> completed"""
        match = self._get_locked(match_id)
        current = MatchStatus(match.status)
        target = MatchStatus(new_status)

        if STATUS_ORDER.index(target) != STATUS_ORDER.index(current) + 1:
            raise InvalidStatusTransition(
                f"Match status cannot change from {current.value} to {target.value}"
            )

        match.status = target.value
        self._commit("advance match status")
        self.db.refresh(match)
        logger.info("Match id=%s is now %s", match_id, target.value)
        return match
