"""
db.py

This module defines the database models and helpers for the Tournament of Jazz bracket application.
It uses SQLAlchemy to manage database sessions and models for Tournaments, Artists, the official
Master Bracket, participant Submissions and Matchup Previews.

Pick sets are stored as JSON objects keyed by matchup key ("round-index"), exactly as the
bracket logic produces them.
"""

import datetime
import uuid

from sqlalchemy import (
    create_engine, Column, Integer, String, Text, JSON, ForeignKey, UniqueConstraint, update
)
from sqlalchemy.orm import sessionmaker, relationship, declarative_base
from config import DATABASE_URL, logger
from constants import NUM_ROUNDS

# Create a base class for all ORM models.
Base = declarative_base()


def _new_id():
    return str(uuid.uuid4())


def utc_now_iso():
    """Current UTC time as an ISO 8601 string."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


class RevealError(ValueError):
    """Raised when a reveal would move revealed_through backwards or out of range."""
    pass


class Tournament(Base):
    """
    A bracket contest.

    Attributes:
        id (str): Primary key.
        name (str): Display name.
        status (str): One of setup, open, closed, revealing, complete.
        submission_deadline (str): ISO timestamp after which submissions close; None for no deadline.
        created_at (str): ISO timestamp.
    """
    __tablename__ = 'tournament'
    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="setup")
    submission_deadline = Column(String, nullable=True)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    master_bracket = relationship("MasterBracket", back_populates="tournament", uselist=False)
    submissions = relationship("Submission", back_populates="tournament")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "submission_deadline": self.submission_deadline,
            "created_at": self.created_at,
        }


class Artist(Base):
    """
    One of the 64 entrants. Seeds 1-16 are unique within a region.
    """
    __tablename__ = 'artists'
    __table_args__ = (UniqueConstraint('region', 'seed', name='uq_artist_region_seed'),)
    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    seed = Column(Integer, nullable=False)
    region = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    instrument = Column(String, nullable=True)
    era = Column(String, nullable=True)
    featured_track_url = Column(String, nullable=True)
    featured_track_title = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    media = Column(JSON, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "seed": self.seed,
            "region": self.region,
            "bio": self.bio,
            "instrument": self.instrument,
            "era": self.era,
            "featured_track_url": self.featured_track_url,
            "featured_track_title": self.featured_track_title,
            "photo_url": self.photo_url,
            "media": self.media,
        }


class MasterBracket(Base):
    """
    The official results for a tournament.

    Attributes:
        picks (dict): Official pick set keyed by matchup key.
        revealed_through (int): Highest round (0-6) whose results may be shown and scored.
            Only ever increases; see reveal_round().
    """
    __tablename__ = 'master_bracket'
    id = Column(String, primary_key=True, default=_new_id)
    tournament_id = Column(String, ForeignKey('tournament.id'), unique=True, nullable=False)
    picks = Column(JSON, nullable=False, default=dict)
    revealed_through = Column(Integer, nullable=False, default=0)
    updated_at = Column(String, nullable=False, default=utc_now_iso)
    tournament = relationship("Tournament", back_populates="master_bracket")

    def to_dict(self):
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "picks": self.picks,
            "revealed_through": self.revealed_through,
            "updated_at": self.updated_at,
        }


class Submission(Base):
    """
    A participant's bracket. Created once at submit time and never modified.
    """
    __tablename__ = 'submissions'
    id = Column(String, primary_key=True, default=_new_id)
    tournament_id = Column(String, ForeignKey('tournament.id'), nullable=False)
    display_name = Column(String, nullable=False)
    access_token = Column(String, unique=True, nullable=False)
    picks = Column(JSON, nullable=False)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    tournament = relationship("Tournament", back_populates="submissions")

    def to_dict(self):
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "display_name": self.display_name,
            "access_token": self.access_token,
            "picks": self.picks,
            "created_at": self.created_at,
        }


class MatchupPreview(Base):
    """Editorial write-up attached to a matchup key."""
    __tablename__ = 'matchup_previews'
    id = Column(String, primary_key=True, default=_new_id)
    tournament_id = Column(String, ForeignKey('tournament.id'), nullable=False)
    matchup_key = Column(String, nullable=False)
    headline = Column(String, nullable=True)
    preview_text = Column(Text, nullable=False)
    fun_fact = Column(Text, nullable=True)
    created_at = Column(String, nullable=False, default=utc_now_iso)

    def to_dict(self):
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "matchup_key": self.matchup_key,
            "headline": self.headline,
            "preview_text": self.preview_text,
            "fun_fact": self.fun_fact,
            "created_at": self.created_at,
        }


# Create the SQLAlchemy engine using the DATABASE_URL from configuration.
engine = create_engine(DATABASE_URL, echo=False)

# Create a session factory bound to the engine.
SessionLocal = sessionmaker(bind=engine)

def init_db():
    """
    Initializes the database by creating all tables defined in the ORM models.
    Call this at application startup to ensure the database schema is in place.
    """
    Base.metadata.create_all(engine)


def get_latest_tournament(session):
    """Most recently created tournament, or None."""
    return session.query(Tournament).order_by(Tournament.created_at.desc()).first()


def get_master_bracket(session, tournament_id):
    return session.query(MasterBracket).filter_by(tournament_id=tournament_id).first()


def upsert_master_bracket(session, tournament_id, picks):
    """
    Replaces the official pick set for a tournament, creating the record on first use.
    revealed_through is never touched here.
    """
    bracket = get_master_bracket(session, tournament_id)
    if bracket is None:
        bracket = MasterBracket(tournament_id=tournament_id, picks=dict(picks), revealed_through=0)
        session.add(bracket)
    else:
        bracket.picks = dict(picks)
        bracket.updated_at = utc_now_iso()
    session.commit()
    return bracket


def reveal_round(session, tournament_id, round_num):
    """
    Advances revealed_through to round_num.

    Reveals are irreversible: the update only applies while the stored value is
    still below round_num, so of two concurrent writers at most one succeeds.

    Raises:
        RevealError: If round_num is outside 1..6, the tournament has no master
            bracket, or the round has already been revealed.
    """
    if isinstance(round_num, bool) or not isinstance(round_num, int) or not 1 <= round_num <= NUM_ROUNDS:
        raise RevealError(f"round is required and must be between 1 and {NUM_ROUNDS}")
    bracket = get_master_bracket(session, tournament_id)
    if bracket is None:
        raise RevealError("No master bracket found for this tournament")

    result = session.execute(
        update(MasterBracket)
        .where(MasterBracket.id == bracket.id, MasterBracket.revealed_through < round_num)
        .values(revealed_through=round_num, updated_at=utc_now_iso())
    )
    if result.rowcount != 1:
        session.rollback()
        session.refresh(bracket)
        raise RevealError(
            f"Cannot reveal round {round_num}. Already revealed through round "
            f"{bracket.revealed_through}. Reveals are irreversible."
        )
    session.commit()
    session.refresh(bracket)
    logger.info(f"Tournament {tournament_id} revealed through round {round_num}")
    return bracket


def create_submission(session, tournament_id, display_name, picks):
    """Stores a new submission under a fresh random access token."""
    submission = Submission(
        tournament_id=tournament_id,
        display_name=display_name.strip(),
        access_token=str(uuid.uuid4()),
        picks=dict(picks),
    )
    session.add(submission)
    session.commit()
    logger.info(f"Stored submission {submission.id} for '{submission.display_name}'")
    return submission


def clear_tournament_data():
    """
    Clears submissions, previews and master brackets while keeping the artist catalog.
    Useful for testing or resetting a tournament.
    """
    session = SessionLocal()
    try:
        session.query(Submission).delete()
        session.query(MatchupPreview).delete()
        session.query(MasterBracket).delete()
        session.commit()
    finally:
        session.close()
