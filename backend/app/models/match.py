import enum

from sqlalchemy import Column, Integer, String, ForeignKey, JSON, CheckConstraint
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func
from app.core.database import Base, UTCDateTime
from app.core.errors import InvalidStatusTransition

class MatchStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"

# Status only moves forward through this order
STATUS_ORDER = [MatchStatus.UPCOMING, MatchStatus.LIVE, MatchStatus.COMPLETED]

def empty_squads() -> dict:
    return {"team_1": [], "team_2": []}

class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("team_1_id <> team_2_id", name="ck_matches_distinct_teams"),
    )

    id = Column(Integer, primary_key=True, index=True)
    team_1_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    team_2_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    date = Column(UTCDateTime(), nullable=False)
    venue = Column(String, nullable=False)
    status = Column(String, nullable=False, default=MatchStatus.UPCOMING.value)

    # Value copy of {id, name, role} per player taken at confirmation time,
    # independent of later roster edits
    squads = Column(JSON, nullable=False, default=empty_squads)
    created_at = Column(UTCDateTime(), server_default=func.now())

    team_1 = relationship("Team", foreign_keys=[team_1_id])
    team_2 = relationship("Team", foreign_keys=[team_2_id])

    @validates("status")
    def validate_status(self, key, value):
        new_status = MatchStatus(value)
        current = self.status
        if current is not None:
            if STATUS_ORDER.index(new_status) < STATUS_ORDER.index(MatchStatus(current)):
                raise InvalidStatusTransition(
                    f"Match status cannot go back from {current} to {new_status.value}"
                )
        return new_status.value
