"""
SQLAlchemy ORM models for the team roster system.
"""

import enum
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Date,
    Time,
    DateTime,
    Numeric,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from dugout.database.db import Base


class Role(str, enum.Enum):
    """Account and membership role."""

    ADMIN = "admin"
    PLAYER = "player"
    PARENT = "parent"


class RosterRole(str, enum.Enum):
    """Role of a player on the roster (not an account role)."""

    STARTER = "Starter"
    BENCH = "Bench"
    PITCHER = "Pitcher"


class GameStatus(str, enum.Enum):
    """Game status enum."""

    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_ROLE_VALUES = ", ".join(f"'{r.value}'" for r in Role)
_ROSTER_ROLE_VALUES = ", ".join(f"'{r.value}'" for r in RosterRole)


class User(Base):
    """User accounts with email/password authentication."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)  # stored lowercase
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False)  # default role at account creation
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    memberships = relationship(
        "TeamMembership", back_populates="user", cascade="all, delete-orphan"
    )
    administered_teams = relationship("Team", back_populates="admin")

    __table_args__ = (CheckConstraint(f"role IN ({_ROLE_VALUES})", name="ck_users_role"),)


class Team(Base):
    """Teams. Created out-of-band; users join with the invite code."""

    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    season = Column(String(100), nullable=False)
    logo_url = Column(String(500), nullable=True)
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    invite_code = Column(String(50), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    admin = relationship("User", back_populates="administered_teams")
    memberships = relationship(
        "TeamMembership", back_populates="team", cascade="all, delete-orphan"
    )
    players = relationship("Player", back_populates="team", cascade="all, delete-orphan")
    games = relationship("Game", back_populates="team", cascade="all, delete-orphan")
    media = relationship("Media", back_populates="team", cascade="all, delete-orphan")


class TeamMembership(Base):
    """Join table (User ↔ Team) with a team-scoped role."""

    __tablename__ = "team_memberships"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    role = Column(String(50), nullable=False)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="memberships")
    team = relationship("Team", back_populates="memberships")

    __table_args__ = (
        UniqueConstraint("user_id", "team_id"),
        CheckConstraint(f"role IN ({_ROLE_VALUES})", name="ck_team_memberships_role"),
        Index("idx_memberships_user_id", "user_id"),
        Index("idx_memberships_team_id", "team_id"),
    )


class Player(Base):
    """Roster entries. Jersey numbers are unique within a team."""

    __tablename__ = "players"

    id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    name = Column(String(255), nullable=False)
    jersey_number = Column(Integer, nullable=False)
    position = Column(String(100), nullable=False)
    role = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    profile_pic_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    team = relationship("Team", back_populates="players")
    stats = relationship("PlayerStat", back_populates="player", cascade="all, delete-orphan")
    scouting_report = relationship(
        "ScoutingReport", back_populates="player", uselist=False, cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("team_id", "jersey_number"),
        CheckConstraint(f"role IN ({_ROSTER_ROLE_VALUES})", name="ck_players_role"),
        Index("idx_players_team_id", "team_id"),
    )


class Game(Base):
    """Scheduled and completed games."""

    __tablename__ = "games"

    id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    opponent = Column(String(255), nullable=False)
    game_date = Column(Date, nullable=False)
    game_time = Column(Time, nullable=False)
    location = Column(String(500), nullable=False)
    home_away = Column(String(10), nullable=False)
    status = Column(String(20), default=GameStatus.UPCOMING.value, nullable=False)
    home_score = Column(Integer, default=0)
    away_score = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    team = relationship("Team", back_populates="games")
    stats = relationship("PlayerStat", back_populates="game", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("home_away IN ('home', 'away')", name="ck_games_home_away"),
        CheckConstraint(
            "status IN ('upcoming', 'completed', 'cancelled')", name="ck_games_status"
        ),
        Index("idx_games_team_id", "team_id"),
    )


class PlayerStat(Base):
    """Per-game batting and pitching line for a player."""

    __tablename__ = "player_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False)
    at_bats = Column(Integer, default=0)
    hits = Column(Integer, default=0)
    rbis = Column(Integer, default=0)
    runs = Column(Integer, default=0)
    strikeouts = Column(Integer, default=0)
    walks = Column(Integer, default=0)
    innings_pitched = Column(Numeric(4, 1), default=0)
    earned_runs = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    player = relationship("Player", back_populates="stats")
    game = relationship("Game", back_populates="stats")

    __table_args__ = (
        UniqueConstraint("player_id", "game_id"),
        Index("idx_stats_player_id", "player_id"),
        Index("idx_stats_game_id", "game_id"),
    )


class Media(Base):
    """Photos and videos attached to a team (files are served elsewhere)."""

    __tablename__ = "media"

    id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_type = Column(String(20), nullable=False)
    file_url = Column(String(500), nullable=False)
    file_size = Column(Integer, nullable=True)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    team = relationship("Team", back_populates="media")

    __table_args__ = (
        CheckConstraint("file_type IN ('image', 'video')", name="ck_media_file_type"),
        Index("idx_media_team_id", "team_id"),
    )


class ScoutingReport(Base):
    """One scouting report per player; rewritten in place on every save."""

    __tablename__ = "scouting_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(
        Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    scout_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Basic information
    height = Column(String(20), nullable=True)
    weight = Column(String(20), nullable=True)
    throws = Column(String(10), nullable=True)
    bats = Column(String(10), nullable=True)
    birth_date = Column(Date, nullable=True)
    school = Column(String(255), nullable=True)
    parent_guardian = Column(String(255), nullable=True)
    emergency_contact = Column(String(50), nullable=True)

    # Hitting
    contact_ability = Column(Integer, nullable=True)
    power = Column(Integer, nullable=True)
    plate_discipline = Column(Integer, nullable=True)
    swing_mechanics = Column(String(20), nullable=True)
    bunting_ability = Column(String(20), nullable=True)
    clutch_hitting = Column(String(20), nullable=True)
    hitting_notes = Column(Text, nullable=True)

    # Fielding
    range_rating = Column(Integer, nullable=True)
    arm_strength = Column(Integer, nullable=True)
    accuracy = Column(Integer, nullable=True)
    hands_glove_work = Column(String(20), nullable=True)
    footwork = Column(String(20), nullable=True)
    game_awareness = Column(String(20), nullable=True)
    fielding_notes = Column(Text, nullable=True)

    # Running
    speed = Column(Integer, nullable=True)
    base_running_iq = Column(String(20), nullable=True)
    steal_ability = Column(String(20), nullable=True)
    running_notes = Column(Text, nullable=True)

    # Pitching
    fastball_velocity = Column(String(50), nullable=True)
    control = Column(Integer, nullable=True)
    command = Column(Integer, nullable=True)
    curveball = Column(String(20), nullable=True)
    changeup = Column(String(20), nullable=True)
    slider_cutter = Column(String(20), nullable=True)
    pitching_notes = Column(Text, nullable=True)

    # Overall
    overall_grade = Column(Integer, nullable=True)
    potential = Column(String(20), nullable=True)
    strengths = Column(Text, nullable=True)
    areas_for_improvement = Column(Text, nullable=True)
    overall_summary = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    player = relationship("Player", back_populates="scouting_report")

    __table_args__ = (Index("idx_scouting_scout_id", "scout_id"),)
