"""
Static HTML rendering of the auction dashboard.

Each team becomes a card with a header (name, player count, total and
remaining bid) and a numbered player table in purchase order.
"""

from datetime import datetime
from html import escape
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from auction_board.models.team import TeamRecord
from auction_board.utils.currency import format_currency

PAGE_TITLE = "Auction Results"

STYLES = """
body { font-family: 'Segoe UI', Arial, sans-serif; background: #f4f6fb; margin: 0; padding: 24px; color: #1d2433; }
h1 { margin: 0 0 4px; }
.last-updated { color: #5b6475; font-size: 0.9em; margin-bottom: 16px; }
.loading, .error, .no-data { padding: 12px 16px; border-radius: 8px; margin-bottom: 16px; }
.loading { background: #e8f0fe; }
.error { background: #fdecea; color: #a12622; }
.no-data { background: #fff; text-align: center; }
.teams { display: grid; grid-template-columns: repeat(auto-fill, minmax(320px, 1fr)); gap: 16px; }
.team-card { background: #fff; border-radius: 10px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); overflow: hidden; }
.team-header { background: #1f3c88; color: #fff; padding: 12px 16px; }
.team-name { font-size: 1.2em; font-weight: 700; }
.team-stats { font-size: 0.85em; opacity: 0.9; margin-top: 4px; }
table { width: 100%; border-collapse: collapse; }
th, td { text-align: left; padding: 6px 12px; border-bottom: 1px solid #eef0f5; }
td.amount, th.amount { text-align: right; }
"""


def format_last_updated(moment: datetime) -> str:
    """Formats a timestamp as '18 Oct 2026, 10:15:30 am' in local time."""
    local = moment.astimezone()
    return f"{local.strftime('%d %b %Y, %I:%M:%S')} {local.strftime('%p').lower()}"


def render_team_card(team: TeamRecord) -> str:
    rows = "".join(
        f"<tr><td>{index}</td><td>{escape(player.name)}</td>"
        f"<td class='amount'>{escape(format_currency(player.amount))}</td></tr>"
        for index, player in enumerate(team.players, start=1)
    )
    stats = (
        f"Players: {team.player_count} | "
        f"Total Bid: {escape(format_currency(team.total_amount))} | "
        f"Remaining Bid: {escape(format_currency(team.remaining_amount))}"
    )
    return (
        "<div class='team-card'>"
        "<div class='team-header'>"
        f"<div class='team-name'>{escape(team.display_name)}</div>"
        f"<div class='team-stats'>{stats}</div>"
        "</div>"
        "<div class='players-table'><table>"
        "<thead><tr><th>#</th><th>Player Name</th><th class='amount'>Bid Amount</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table></div>"
        "</div>"
    )


def render_html(
    teams: Sequence[TeamRecord],
    error: Optional[str] = None,
    loading: bool = False,
    refreshed_at: Optional[datetime] = None,
) -> str:
    """Renders the full dashboard page as a self-contained HTML document."""
    parts = []
    if loading:
        parts.append("<div class='loading' id='loading'>Loading team data...</div>")
    if error:
        parts.append(f"<div class='error' id='error'>{escape(error)}</div>")
    if not loading:
        if teams:
            cards = "".join(render_team_card(team) for team in teams)
            parts.append(f"<div class='teams' id='teamsContainer'>{cards}</div>")
        else:
            parts.append("<div class='no-data'>No team data available</div>")

    updated = ""
    if refreshed_at is not None:
        updated = f"Last Updated: {escape(format_last_updated(refreshed_at))}"

    body = "\n".join(parts)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{PAGE_TITLE}</title>
<style>{STYLES}</style>
</head>
<body>
<h1>{PAGE_TITLE}</h1>
<div class="last-updated" id="lastUpdated">{updated}</div>
{body}
</body>
</html>"""


def write_dashboard(
    output_path: Path,
    teams: Sequence[TeamRecord],
    error: Optional[str] = None,
    refreshed_at: Optional[datetime] = None,
    loading: bool = False,
) -> Path:
    """Writes the rendered dashboard to disk and returns the path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        render_html(teams, error=error, loading=loading, refreshed_at=refreshed_at), encoding="utf-8"
    )
    logger.info(f"Dashboard written to {output_path} ({len(teams)} teams)")
    return output_path
