from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from auction_board.models.refresh import RefreshResult
from auction_board.models.team import TeamRecord
from auction_board.presentation.html_dashboard import format_last_updated
from auction_board.utils.currency import format_currency


def team_summary(team: TeamRecord) -> str:
    return (
        f"Players: {team.player_count} | "
        f"Total Bid: {format_currency(team.total_amount)} | "
        f"Remaining Bid: {format_currency(team.remaining_amount)}"
    )


def build_team_panel(team: TeamRecord) -> Panel:
    """A team card: numbered player table under the team name."""
    table = Table(expand=True, show_edge=False)
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Player Name")
    table.add_column("Bid Amount", justify="right")
    for index, player in enumerate(team.players, start=1):
        table.add_row(str(index), player.name, format_currency(player.amount))

    return Panel(
        table,
        title=f"[bold]{team.display_name}[/bold]",
        subtitle=team_summary(team),
    )


def render_console(
    result: Optional[RefreshResult],
    error: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Prints the dashboard (or the refresh error) to the terminal."""
    console = console or Console()

    if error:
        console.print(Panel(error, title="[bold red]Error[/bold red]", border_style="red"))
    if result is None or not result.teams:
        if not error:
            console.print("[yellow]No team data available[/yellow]")
        return

    console.print(Group(*(build_team_panel(team) for team in result.teams)))
    if result.failures:
        skipped = ", ".join(failure.team_name for failure in result.failures)
        console.print(f"[yellow]Skipped teams:[/yellow] {skipped}")
    console.print(f"[dim]Last Updated: {format_last_updated(result.refreshed_at)}[/dim]")
