from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base, UTCDateTime

# Membership join, no columns of its own
team_players = Table(
    "team_players",
    Base.metadata,
    Column("team_id", Integer, ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True),
    Column("player_id", Integer, ForeignKey("players.id", ondelete="CASCADE"), primary_key=True),
)

class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)  # always server-generated
    name = Column(String, nullable=False)
    created_at = Column(UTCDateTime(), server_default=func.now())

    players = relationship(
        "Player",
        secondary=team_players,
        backref="teams",
        order_by="Player.id",
    )
