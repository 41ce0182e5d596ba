from sqlalchemy import Column, Integer, String
from sqlalchemy.sql import func
from app.core.database import Base, UTCDateTime

class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    # Uniqueness lives in the table so concurrent signups cannot both win
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)  # bcrypt, never returned by the API
    created_at = Column(UTCDateTime(), server_default=func.now())
