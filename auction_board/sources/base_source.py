from abc import ABC, abstractmethod

from auction_board.models.enums import SourceKind


class FetchError(Exception):
    """Custom exception for a team CSV that could not be read."""

    pass


class NotFoundError(FetchError):
    """Exception raised when a team's CSV does not exist (404 / missing file)."""

    pass


class BaseSource(ABC):
    """Abstract base class for places team CSV files are read from."""

    kind: SourceKind

    def __init__(self, base_location: str):
        self.base_location = base_location

    @abstractmethod
    def location_for(self, team_name: str) -> str:
        """Builds the resource location of a team's CSV file."""
        pass

    @abstractmethod
    async def fetch_team_csv(self, team_name: str) -> str:
        """Reads the raw CSV text for one team.

        Raises:
            FetchError: If the resource cannot be read for any reason.
        """
        pass

    async def close(self) -> None:
        """Releases any resources held by the source."""
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
