from typing import List, Optional, Sequence

from loguru import logger

from auction_board.models.enums import RowKind
from auction_board.models.player import PlayerRecord
from auction_board.models.team import TeamRecord
from auction_board.parsing.csv_line import tokenize_line
from auction_board.utils.currency import normalize_amount

# Fixed column convention of the auction ledger CSVs
NAME_INDEX = 0
AMOUNT_INDEX = 1


class ParseError(Exception):
    """Custom exception for structural CSV errors in a team file."""

    pass


def classify_row(row: Sequence[str]) -> RowKind:
    """Decides what a tokenized CSV row represents, based only on its label.

    The checks run in precedence order: "remaining" beats "total", so a
    "Remaining Total" row is a remaining-budget row. A player whose name
    contains "total" is misclassified as a summary row; the heuristic accepts
    that limitation.
    """
    label = row[NAME_INDEX] if len(row) > NAME_INDEX else ""
    label = (label or "").strip()
    lowered = label.lower()

    if "remaining" in lowered:
        return RowKind.REMAINING_SUMMARY
    if "total" in lowered:
        return RowKind.TOTAL_SUMMARY
    if not label:
        return RowKind.SKIP
    return RowKind.PLAYER


def _amount_field(row: Sequence[str]) -> str:
    return row[AMOUNT_INDEX] if len(row) > AMOUNT_INDEX else ""


class TeamParser:
    """Turns one team's raw CSV text into a TeamRecord."""

    def __init__(self, fixed_budget: float):
        if fixed_budget < 0:
            raise ValueError("fixed_budget must be non-negative")
        self.fixed_budget = fixed_budget
        logger.debug(f"TeamParser initialized with fixed budget {fixed_budget}.")

    def parse_team(self, team_name: str, csv_text: str) -> Optional[TeamRecord]:
        """Parses a team's CSV, returning None when the file is unusable.

        Args:
            team_name: Roster name of the team; becomes TeamRecord.name.
            csv_text: Full CSV text, header row first.

        Returns:
            The parsed TeamRecord, or None if the text has no data rows or
            could not be parsed.
        """
        try:
            return self._parse(team_name, csv_text)
        except ParseError as e:
            logger.warning(f"Skipping team '{team_name}': {e}")
            return None
        except Exception as e:
            logger.exception(f"Unexpected error parsing CSV for team '{team_name}': {e}")
            return None

    def _parse(self, team_name: str, csv_text: str) -> TeamRecord:
        if not isinstance(csv_text, str):
            raise ParseError(f"expected CSV text, got {type(csv_text).__name__}")

        lines = [line for line in csv_text.strip().split("\n") if line.strip()]
        if len(lines) < 2:
            raise ParseError("no data rows (a header and at least one row are required)")

        headers = tokenize_line(lines[0])
        players: List[PlayerRecord] = []
        total_amount = 0.0
        remaining_amount = 0.0

        for line_number, line in enumerate(lines[1:], start=2):
            row = tokenize_line(line)
            kind = classify_row(row)

            if kind == RowKind.REMAINING_SUMMARY:
                remaining_amount = normalize_amount(_amount_field(row))
            elif kind == RowKind.TOTAL_SUMMARY:
                total_amount = normalize_amount(_amount_field(row))
            elif kind == RowKind.PLAYER:
                players.append(
                    PlayerRecord(
                        name=row[NAME_INDEX],
                        amount=normalize_amount(_amount_field(row)),
                    )
                )
            else:
                logger.debug(f"{team_name}: skipping blank-label row {line_number}")

        if not total_amount:
            total_amount = sum(player.amount for player in players)
        if not remaining_amount:
            remaining_amount = self.fixed_budget - total_amount

        team = TeamRecord(
            name=team_name,
            players=tuple(players),
            total_amount=total_amount,
            remaining_amount=remaining_amount,
            headers=tuple(headers),
        )
        logger.debug(
            f"Parsed team '{team_name}': {team.player_count} players, "
            f"total {total_amount}, remaining {remaining_amount}"
        )
        return team
