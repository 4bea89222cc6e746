# auction_board/parsing/csv_line.py
from typing import List

QUOTE = '"'
DELIMITER = ","


def tokenize_line(line: str) -> List[str]:
    """Splits one CSV line into trimmed fields.

    A double quote toggles the "inside quotes" state and is dropped from the
    output; a comma only ends a field outside quotes. An unterminated quote
    keeps the rest of the line as a single field instead of raising.

    Args:
        line: A single line of CSV text, without its line terminator.

    Returns:
        The ordered field values. An empty line yields one empty field.
    """
    fields: List[str] = []
    current: List[str] = []
    inside_quotes = False

    for char in line:
        if char == QUOTE:
            inside_quotes = not inside_quotes
        elif char == DELIMITER and not inside_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields
