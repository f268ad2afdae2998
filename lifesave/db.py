"""
Database configuration and models for the LifeSave health assistant.

Stores a privacy-preserving audit trail of assistant interactions: only
hashes of the user's text and of the reply are kept, never plain text.
"""

import logging
from datetime import datetime
from typing import Dict, Generator, List, Optional

from sqlalchemy import Column, DateTime, Index, Integer, String, create_engine, func
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from . import config

logger = logging.getLogger(__name__)

CHANNELS = ("chat", "symptom_check")


def make_engine(db_url: str):
    return create_engine(
        db_url,
        connect_args={"check_same_thread": False} if db_url.startswith("sqlite") else {},
        echo=False,
    )


engine = make_engine(config.DB_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


class InteractionLog(Base):
    """One hashed assistant interaction."""
    __tablename__ = "interaction_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    channel = Column(String(32), nullable=False)
    hashed_query = Column(String(128), nullable=False)
    hashed_response = Column(String(128), nullable=False)
    urgency = Column(String(16), nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_interaction_channel', 'channel'),
        Index('idx_interaction_timestamp', 'timestamp'),
        Index('idx_interaction_query', 'hashed_query'),
    )

    def __repr__(self):
        return f"<InteractionLog(id={self.id}, channel={self.channel}, timestamp={self.timestamp})>"


def get_db() -> Generator[Session, None, None]:
    """Yield a session for FastAPI dependency injection and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database(bind=None) -> None:
    """
    Create the audit tables if they don't exist.

    Raises whatever the engine raises so startup can decide how to degrade.
    """
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Error initializing database: %s", e)
        raise


def create_interaction_log(db: Session, channel: str, hashed_query: str,
                           hashed_response: str, urgency: Optional[str] = None) -> InteractionLog:
    """
    Persist one hashed interaction.

    Raises:
        ValueError: If ``channel`` is not a known channel
    """
    if channel not in CHANNELS:
        raise ValueError(f"Unknown interaction channel: {channel}")

    entry = InteractionLog(
        channel=channel,
        hashed_query=hashed_query,
        hashed_response=hashed_response,
        urgency=urgency,
        timestamp=datetime.utcnow(),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_recent_interactions(db: Session, limit: int = 100,
                            channel: Optional[str] = None) -> List[InteractionLog]:
    query = db.query(InteractionLog)
    if channel:
        query = query.filter(InteractionLog.channel == channel)
    return query.order_by(InteractionLog.timestamp.desc(), InteractionLog.id.desc()).limit(limit).all()


def count_interactions_by_channel(db: Session) -> Dict[str, int]:
    rows = db.query(InteractionLog.channel, func.count(InteractionLog.id)).group_by(
        InteractionLog.channel
    ).all()
    return {channel: count for channel, count in rows}
