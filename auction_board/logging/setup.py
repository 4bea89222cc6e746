import re
import sys
import logging
from typing import Any

from loguru import logger

from auction_board.config.settings import settings

SENSITIVE_QUERY_KEYS = ["token", "sig", "signature", "key", "secret", "authkey"]

_QUERY_PARAM_PATTERN = re.compile(
    r"(?P<prefix>[?&](?:" + "|".join(SENSITIVE_QUERY_KEYS) + r")=)(?P<value>[^&\s'\"]+)",
    re.IGNORECASE,
)


def mask_sensitive_query(text: str) -> str:
    """Masks credential-like query parameter values inside URLs."""

    def _mask(match: re.Match) -> str:
        value = match.group("value")
        # Rudimentary masking, keeps just enough to tell links apart
        if len(value) > 8:
            return match.group("prefix") + value[:4] + "****" + value[-4:]
        return match.group("prefix") + "********"

    return _QUERY_PARAM_PATTERN.sub(_mask, text)


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask sensitive data in log records."""
    record["message"] = mask_sensitive_query(record["message"])

    if record.get("extra"):
        for extra_key, extra_value in record["extra"].items():
            if isinstance(extra_value, str):
                record["extra"][extra_key] = mask_sensitive_query(extra_value)

    return True


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=True,
        filter=sensitive_data_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    # httpx logs through stdlib logging
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Skip logging-module frames so loguru reports the real caller
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.info("Standard logging intercepted.")
