"""
Pydantic models for API request/response validation.
"""

from datetime import date
from typing import Optional, Literal
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Login with email and password."""

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class RegisterRequest(BaseModel):
    """Create an account and join the team that owns the invite code."""

    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=6)
    code: str = Field(min_length=1)
    # Only self-declarable roles; admins are provisioned out-of-band.
    role: Literal["player", "parent"]

    @field_validator("name", "code", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return _strip(value)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class UserResponse(BaseModel):
    """Public user fields. Never includes the password hash."""

    id: int
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class ProfileResponse(BaseModel):
    user: UserResponse


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

Position = Literal[
    "Pitcher",
    "Catcher",
    "First Base",
    "Second Base",
    "Third Base",
    "Shortstop",
    "Left Field",
    "Center Field",
    "Right Field",
]


class PlayerFields(BaseModel):
    """Editable player fields shared by create and update."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=2)
    jersey_number: int = Field(alias="jerseyNumber", ge=0, le=999)
    position: Position
    role: Literal["Starter", "Bench", "Pitcher"]
    email: Optional[EmailStr] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return _strip(value)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return _normalize_email(value)


class CreatePlayerRequest(PlayerFields):
    team_id: int = Field(alias="teamId")


class UpdatePlayerRequest(PlayerFields):
    pass


# ---------------------------------------------------------------------------
# Scouting reports
# ---------------------------------------------------------------------------

Rating = Optional[int]


def _rating():
    return Field(default=None, ge=1, le=10)


class ScoutingReportRequest(BaseModel):
    """
    Full scouting report for one player. Field names mirror the report columns;
    the camelCase aliases are what the web client sends.
    """

    model_config = ConfigDict(populate_by_name=True)

    player_id: int = Field(alias="playerId")

    height: Optional[str] = Field(default=None, max_length=20)
    weight: Optional[str] = Field(default=None, max_length=20)
    throws: Optional[str] = Field(default=None, max_length=10)
    bats: Optional[str] = Field(default=None, max_length=10)
    birth_date: Optional[date] = Field(default=None, alias="birthDate")
    school: Optional[str] = None
    parent_guardian: Optional[str] = Field(default=None, alias="parentGuardian")
    emergency_contact: Optional[str] = Field(default=None, alias="emergencyContact", max_length=50)

    contact_ability: Rating = Field(default=None, alias="contactAbility", ge=1, le=10)
    power: Rating = _rating()
    plate_discipline: Rating = Field(default=None, alias="plateDiscipline", ge=1, le=10)
    swing_mechanics: Optional[str] = Field(default=None, alias="swingMechanics")
    bunting_ability: Optional[str] = Field(default=None, alias="buntingAbility")
    clutch_hitting: Optional[str] = Field(default=None, alias="clutchHitting")
    hitting_notes: Optional[str] = Field(default=None, alias="hittingNotes")

    range_rating: Rating = Field(default=None, alias="range", ge=1, le=10)
    arm_strength: Rating = Field(default=None, alias="armStrength", ge=1, le=10)
    accuracy: Rating = _rating()
    hands_glove_work: Optional[str] = Field(default=None, alias="handsGloveWork")
    footwork: Optional[str] = None
    game_awareness: Optional[str] = Field(default=None, alias="gameAwareness")
    fielding_notes: Optional[str] = Field(default=None, alias="fieldingNotes")

    speed: Rating = _rating()
    base_running_iq: Optional[str] = Field(default=None, alias="baseRunningIQ")
    steal_ability: Optional[str] = Field(default=None, alias="stealAbility")
    running_notes: Optional[str] = Field(default=None, alias="runningNotes")

    fastball_velocity: Optional[str] = Field(default=None, alias="fastballVelocity")
    control: Rating = _rating()
    command: Rating = _rating()
    curveball: Optional[str] = None
    changeup: Optional[str] = None
    slider_cutter: Optional[str] = Field(default=None, alias="sliderCutter")
    pitching_notes: Optional[str] = Field(default=None, alias="pitchingNotes")

    overall_grade: Rating = Field(default=None, alias="overallGrade", ge=1, le=10)
    potential: Optional[str] = None
    strengths: Optional[str] = None
    areas_for_improvement: Optional[str] = Field(default=None, alias="areasForImprovement")
    overall_summary: Optional[str] = Field(default=None, alias="overallSummary")

    def report_fields(self) -> dict:
        """Column name -> value for everything except the player id."""
        return self.model_dump(exclude={"player_id"})
