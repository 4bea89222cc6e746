from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .player import PlayerRecord


class TeamRecord(BaseModel):
    """Represents one team's auction outcome."""

    model_config = ConfigDict(frozen=True)

    name: str  # Matches the roster entry used to fetch it
    # Purchase order as it appears in the CSV, never sorted
    players: Tuple[PlayerRecord, ...] = ()
    total_amount: float = 0.0
    remaining_amount: float = 0.0
    headers: Tuple[str, ...] = Field(
        (), description="Tokenized header row of the source CSV."
    )

    @computed_field  # type: ignore[misc]
    @property
    def player_count(self) -> int:
        return len(self.players)

    @computed_field  # type: ignore[misc]
    @property
    def display_name(self) -> str:
        """Team name as shown on the dashboard cards."""
        return self.name.upper()
