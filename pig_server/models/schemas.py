from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import BigInteger, Boolean, DateTime, SmallInteger, String
from datetime import datetime


class Base(DeclarativeBase):
    pass


class PigSession(Base):
    __tablename__ = "pig_session"
    identity = Column(String, primary_key=True, index=True)
    total_score = Column(BigInteger, nullable=False, default=0)
    turn_score = Column(BigInteger, nullable=False, default=0)
    last_roll = Column(SmallInteger, nullable=False, default=0)  # 0 means no roll since last hold
    round = Column(BigInteger, nullable=False, default=0)
    turn = Column(BigInteger, nullable=False, default=0)
    game_over = Column(Boolean, nullable=False, default=False)
    completed = Column(Boolean, nullable=False, default=False)
    games_played = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class Aggregate(Base):
    __tablename__ = "aggregate"
    # Either the canonical module slot or the identity of the caller that created it
    slot = Column(String, primary_key=True, index=True)
    total_completions = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now)


class UserTable(Base):
    __tablename__ = "users"
    username = Column(String, primary_key=True, index=True)
    hash_password = Column(String)
    salt = Column(String)
