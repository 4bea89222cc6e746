from datetime import datetime, timezone
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from .enums import FailureReason
from .team import TeamRecord


class TeamFailure(BaseModel):
    """A single team that could not be loaded during a refresh."""

    model_config = ConfigDict(frozen=True)

    team_name: str
    reason: FailureReason
    message: str = ""


class RefreshResult(BaseModel):
    """Outcome of one refresh cycle: the sorted teams plus per-team failures."""

    model_config = ConfigDict(frozen=True)

    teams: Tuple[TeamRecord, ...]
    failures: Tuple[TeamFailure, ...] = ()
    refreshed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
