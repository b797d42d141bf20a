"""Pydantic models for RobotEvents payloads and roster check outcomes."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List


def _null_to_default(model, value, info):
    """Treat an explicit JSON null like an absent field."""
    if value is None:
        return model.model_fields[info.field_name].get_default(call_default_factory=True)
    return value


class TeamLocation(BaseModel):
    """Location sub-record of a registered team."""
    model_config = ConfigDict(extra="allow")

    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    postcode: Optional[str] = None


class Team(BaseModel):
    """A team registered for an event. Identity is the numeric id only."""
    model_config = ConfigDict(extra="allow")

    id: int
    number: str = ""
    team_name: Optional[str] = None
    robot_name: Optional[str] = None
    organization: Optional[str] = None
    location: TeamLocation = Field(default_factory=TeamLocation)
    registered: bool = False

    @field_validator("number", "location", "registered", mode="before")
    @classmethod
    def _nulls(cls, value, info):
        return _null_to_default(cls, value, info)


class RosterMeta(BaseModel):
    model_config = ConfigDict(extra="allow")

    total: int = 0

    @field_validator("total", mode="before")
    @classmethod
    def _nulls(cls, value, info):
        return _null_to_default(cls, value, info)


class RosterSnapshot(BaseModel):
    """Roster response for one event, stored verbatim as the local snapshot."""
    model_config = ConfigDict(extra="allow")

    meta: RosterMeta = Field(default_factory=RosterMeta)
    data: List[Team] = []

    @field_validator("meta", "data", mode="before")
    @classmethod
    def _nulls(cls, value, info):
        return _null_to_default(cls, value, info)


class EventDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


class EventOutcome(BaseModel):
    """Result of checking one event during a run."""
    event_id: str
    status: str  # completed, skipped, failed
    stage: Optional[str] = None
    error: Optional[str] = None
    previous_count: Optional[int] = None
    current_count: Optional[int] = None
    missing_count: int = 0
    missing_numbers: List[str] = []
    notified: bool = False
