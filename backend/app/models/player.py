import enum

from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import validates
from sqlalchemy.sql import func
from app.core.database import Base, UTCDateTime

class PlayerRole(str, enum.Enum):
    BATTER = "batter"
    BOWLER = "bowler"
    ALL_ROUNDER = "all-rounder"
    WICKETKEEPER = "wicketkeeper"

class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)

    # NULL means "not yet recorded", which is not the same as 0
    matches_played = Column(Integer, nullable=True)
    runs = Column(Integer, nullable=True)
    average = Column(Float, nullable=True)
    strike_rate = Column(Float, nullable=True)
    created_at = Column(UTCDateTime(), server_default=func.now())

    # teams: backref from Team.players

    @validates("role")
    def validate_role(self, key, value):
        return PlayerRole(value).value

    def summary(self) -> dict:
        """Frozen copy stored in a match squad snapshot"""
        return {"id": self.id, "name": self.name, "role": self.role}
