import asyncio
from pathlib import Path

from loguru import logger

from auction_board.models.enums import SourceKind
from .base_source import BaseSource, FetchError, NotFoundError


class LocalCsvSource(BaseSource):
    """Reads team CSV files from a folder on disk (e.g. 'excel_data/')."""

    kind = SourceKind.LOCAL

    def __init__(self, base_location: str):
        super().__init__(base_location)
        self.folder = Path(base_location)

    def location_for(self, team_name: str) -> str:
        return str(self.folder / f"{team_name}.csv")

    async def fetch_team_csv(self, team_name: str) -> str:
        path = Path(self.location_for(team_name))
        logger.debug(f"Reading {path}")
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
        except FileNotFoundError as e:
            raise NotFoundError(f"Failed to load {path} (file not found)") from e
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"Failed to load {path}: {e}") from e
