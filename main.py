import sys
import asyncio
from pathlib import Path
from typing import Optional

# --- Settings/Logging ---
from auction_board.logging.setup import setup_logging
from auction_board.config.settings import settings

setup_logging()

from loguru import logger
from rich.console import Console

# --- End Settings/Logging ---

from auction_board.models.refresh import RefreshResult
from auction_board.normalization.team_parser import TeamParser
from auction_board.presentation.console import render_console
from auction_board.presentation.html_dashboard import write_dashboard
from auction_board.services.orchestrator import (
    AuctionBoard,
    EmptyResultError,
    RefreshInProgressError,
)
from auction_board.sources.factory import build_source


async def run_refresh_cycle(
    board: AuctionBoard,
    output_path: Optional[Path] = None,
    console: Optional[Console] = None,
) -> Optional[RefreshResult]:
    """Runs one refresh and publishes the outcome to the console and HTML page."""
    if board.is_refreshing:
        logger.warning("Skipping refresh: a refresh is already in progress.")
        return None

    output_path = output_path or settings.dashboard_output
    write_dashboard(output_path, [], loading=True)

    result: Optional[RefreshResult] = None
    error: Optional[str] = None
    try:
        result = await board.refresh()
    except EmptyResultError as e:
        error = str(e)
        logger.error(f"Refresh produced no data: {e}")
    except RefreshInProgressError as e:
        logger.warning(f"Skipping refresh: {e}")
        return None

    # A failed refresh clears the page instead of leaving stale teams behind
    teams = result.teams if result else ()
    refreshed_at = result.refreshed_at if result else None
    write_dashboard(output_path, teams, error=error, refreshed_at=refreshed_at)
    render_console(result, error=error, console=console)
    return result


async def main() -> None:
    """Main entry point for the application."""
    logger.info("Starting Auction Board - Fetch, Parse, and Render team results")

    source = build_source(settings)
    board = AuctionBoard(
        source=source,
        parser=TeamParser(settings.fixed_budget),
        roster=settings.team_roster,
        max_concurrency=settings.fetch_concurrency,
    )
    try:
        await run_refresh_cycle(board)

        interval = settings.refresh_interval_seconds
        while interval:
            logger.info(f"Next refresh in {interval:g}s (Ctrl+C to stop)")
            await asyncio.sleep(interval)
            await run_refresh_cycle(board)
    except Exception:
        logger.exception("An error occurred during main execution loop.")
    finally:
        await source.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
