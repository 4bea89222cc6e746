# auction_board/models/player.py
from pydantic import BaseModel, ConfigDict, Field


class PlayerRecord(BaseModel):
    """One player won by a team at auction."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    name: str = Field(..., min_length=1)
    amount: float = Field(0.0, ge=0, description="Winning bid for this player.")
