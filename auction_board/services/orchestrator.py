import asyncio
import unicodedata
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from auction_board.models.enums import FailureReason
from auction_board.models.refresh import RefreshResult, TeamFailure
from auction_board.models.team import TeamRecord
from auction_board.normalization.team_parser import TeamParser
from auction_board.sources.base_source import BaseSource, FetchError

NO_DATA_MESSAGE = (
    "No team data could be loaded. Please ensure the team CSV files are "
    "available at the configured data location."
)

# Outcome of loading one team: exactly one of the two is set
TeamOutcome = Tuple[Optional[TeamRecord], Optional[TeamFailure]]


class EmptyResultError(Exception):
    """Raised when a refresh loads zero teams across the whole roster."""

    def __init__(self, message: str = NO_DATA_MESSAGE, failures: Sequence[TeamFailure] = ()):
        super().__init__(message)
        self.failures: Tuple[TeamFailure, ...] = tuple(failures)


class RefreshInProgressError(Exception):
    """Raised when refresh() is called while a previous refresh is still running."""

    pass


def team_sort_key(team: TeamRecord) -> Tuple[str, str]:
    """Case- and accent-insensitive ordering, raw name as the tie-break."""
    decomposed = unicodedata.normalize("NFKD", team.name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold(), team.name


class AuctionBoard:
    """Loads every roster team's CSV and assembles the dashboard collection."""

    def __init__(
        self,
        source: BaseSource,
        parser: TeamParser,
        roster: Sequence[str],
        max_concurrency: int = 1,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.source = source
        self.parser = parser
        self.roster = list(roster)
        self.max_concurrency = max_concurrency
        self._refresh_lock = asyncio.Lock()

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_lock.locked()

    async def refresh(self) -> RefreshResult:
        """Re-fetches and parses every team from scratch.

        Teams are loaded one after another unless max_concurrency > 1. A team
        that fails to fetch or parse is logged and left out of the result.

        Returns:
            A RefreshResult with the loaded teams sorted by name.

        Raises:
            EmptyResultError: If no team could be loaded.
            RefreshInProgressError: If another refresh on this board is running.
        """
        if self._refresh_lock.locked():
            raise RefreshInProgressError("A refresh is already in progress.")

        async with self._refresh_lock:
            logger.info(
                f"Starting refresh for {len(self.roster)} teams from "
                f"{self.source.kind.value.lower()} source {self.source.base_location}"
            )
            if self.max_concurrency == 1:
                outcomes = [await self._load_team(name) for name in self.roster]
            else:
                semaphore = asyncio.Semaphore(self.max_concurrency)

                async def bounded(name: str) -> TeamOutcome:
                    async with semaphore:
                        return await self._load_team(name)

                outcomes = await asyncio.gather(*(bounded(name) for name in self.roster))

            teams: List[TeamRecord] = [team for team, _ in outcomes if team is not None]
            failures = tuple(failure for _, failure in outcomes if failure is not None)

            if not teams:
                logger.error(f"Refresh failed: none of {len(self.roster)} teams could be loaded.")
                raise EmptyResultError(failures=failures)

            teams.sort(key=team_sort_key)
            if failures:
                logger.warning(
                    f"Refresh finished with {len(failures)} failed team(s): "
                    f"{[failure.team_name for failure in failures]}"
                )
            logger.success(f"Refresh complete. Loaded {len(teams)} teams.")
            return RefreshResult(teams=tuple(teams), failures=failures)

    async def _load_team(self, team_name: str) -> TeamOutcome:
        """Fetches and parses a single team, never raising."""
        try:
            csv_text = await self.source.fetch_team_csv(team_name)
        except FetchError as e:
            logger.error(f"Error loading team {team_name}: {e}")
            return None, TeamFailure(
                team_name=team_name, reason=FailureReason.FETCH, message=str(e)
            )
        except Exception as e:
            logger.exception(f"Unexpected error loading team {team_name}: {e}")
            return None, TeamFailure(
                team_name=team_name, reason=FailureReason.FETCH, message=str(e)
            )

        team = self.parser.parse_team(team_name, csv_text)
        if team is None:
            return None, TeamFailure(
                team_name=team_name,
                reason=FailureReason.PARSE,
                message=f"No usable data for {team_name}",
            )

        logger.info(f"Loaded team {team_name} ({team.player_count} players)")
        return team, None
