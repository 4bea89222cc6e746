from enum import Enum


class RowKind(str, Enum):
    PLAYER = "PLAYER"
    TOTAL_SUMMARY = "TOTAL_SUMMARY"  # "Total" ledger row
    REMAINING_SUMMARY = "REMAINING_SUMMARY"  # "Remaining Bid Amount" ledger row
    SKIP = "SKIP"  # Blank label


class FailureReason(str, Enum):
    FETCH = "FETCH"
    PARSE = "PARSE"


class SourceKind(str, Enum):
    HTTP = "HTTP"
    LOCAL = "LOCAL"
