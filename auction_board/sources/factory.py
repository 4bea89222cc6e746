from auction_board.config.settings import AppSettings
from auction_board.models.enums import SourceKind
from .base_source import BaseSource
from .http_source import HttpCsvSource
from .local_source import LocalCsvSource


def detect_source_kind(base_location: str) -> SourceKind:
    """HTTP for http(s) URLs, local folder for everything else."""
    if base_location.lower().startswith(("http://", "https://")):
        return SourceKind.HTTP
    return SourceKind.LOCAL


def build_source(app_settings: AppSettings) -> BaseSource:
    """Creates the CSV source configured by DATA_BASE_URL."""
    base_location = app_settings.data_base_url
    if detect_source_kind(base_location) == SourceKind.HTTP:
        return HttpCsvSource(
            base_location,
            timeout_seconds=app_settings.request_timeout_seconds,
            max_attempts=app_settings.fetch_max_attempts,
        )
    return LocalCsvSource(base_location)
