"""Tests for teams, players and squad membership."""

import pytest
from sqlalchemy.orm import Session

from app.core.errors import PlayerNotFound, TeamNotFound
from app.models.team import team_players
from app.services.roster import RosterDirectory
from app.services.teams import TeamRegistry


@pytest.fixture
def teams(db: Session) -> TeamRegistry:
    return TeamRegistry(db)


@pytest.fixture
def roster(db: Session, teams: TeamRegistry) -> RosterDirectory:
    return RosterDirectory(db, teams)


class TestTeamRegistry:
    def test_ids_are_generated(self, teams: TeamRegistry) -> None:
        first = teams.create_team("Mumbai")
        second = teams.create_team("Chennai")

        assert first.id is not None
        assert second.id != first.id

    def test_new_team_has_empty_squad(self, teams: TeamRegistry) -> None:
        team = teams.create_team("Mumbai")

        assert teams.current_squad(team.id) == []

    def test_find_missing_team(self, teams: TeamRegistry) -> None:
        with pytest.raises(TeamNotFound):
            teams.find_team(404)

    def test_squad_of_missing_team(self, teams: TeamRegistry) -> None:
        with pytest.raises(TeamNotFound):
            teams.current_squad(404)


class TestRosterDirectory:
    def test_unset_stats_stay_unset(self, roster: RosterDirectory) -> None:
        player = roster.create_player("Bumrah", "bowler")

        stats = roster.get_stats(player.id)
        assert stats.matches_played is None
        assert stats.runs is None
        assert stats.average is None
        assert stats.strike_rate is None

    def test_zero_is_recorded(self, roster: RosterDirectory) -> None:
        player = roster.create_player("Bumrah", "bowler", matches_played=0, runs=0)

        stats = roster.get_stats(player.id)
        assert stats.matches_played == 0
        assert stats.runs == 0

    def test_unknown_role_rejected(self, roster: RosterDirectory) -> None:
        with pytest.raises(ValueError):
            roster.create_player("Nobody", "goalkeeper")

    def test_stats_of_missing_player(self, roster: RosterDirectory) -> None:
        with pytest.raises(PlayerNotFound):
            roster.get_stats(12345)

    def test_add_to_squad_creates_member(self, roster: RosterDirectory, teams: TeamRegistry) -> None:
        team = teams.create_team("Bangalore")

        player = roster.add_player_to_team_squad(team.id, "Virat", "batter")

        assert [p.id for p in teams.current_squad(team.id)] == [player.id]

    def test_same_name_creates_distinct_players(self, roster: RosterDirectory, teams: TeamRegistry) -> None:
        team = teams.create_team("Bangalore")

        first = roster.add_player_to_team_squad(team.id, "Virat", "batter")
        second = roster.add_player_to_team_squad(team.id, "Virat", "batter")

        assert first.id != second.id
        assert [p.id for p in teams.current_squad(team.id)] == [first.id, second.id]

    def test_add_to_missing_team_writes_nothing(self, roster: RosterDirectory, db: Session) -> None:
        with pytest.raises(TeamNotFound):
            roster.add_player_to_team_squad(99, "Virat", "batter")

        assert db.execute(team_players.select()).all() == []
        with pytest.raises(PlayerNotFound):
            roster.get_stats(1)

    def test_player_may_join_several_teams(self, roster: RosterDirectory, teams: TeamRegistry) -> None:
        home = teams.create_team("Home")
        away = teams.create_team("Away")
        player = roster.add_player_to_team_squad(home.id, "Rashid", "all-rounder")

        away.players.append(player)
        roster.db.commit()

        assert player in teams.current_squad(home.id)
        assert player in teams.current_squad(away.id)

    def test_update_stats_only_touches_given_fields(self, roster: RosterDirectory) -> None:
        player = roster.create_player("Rohit", "batter", matches_played=10, runs=400)

        updated = roster.update_stats(player.id, runs=450, strike_rate=140.5)

        assert updated.matches_played == 10
        assert updated.runs == 450
        assert updated.strike_rate == 140.5
        assert updated.average is None

    def test_update_stats_rejects_other_fields(self, roster: RosterDirectory) -> None:
        player = roster.create_player("Rohit", "batter")

        with pytest.raises(ValueError):
            roster.update_stats(player.id, name="Someone else")
