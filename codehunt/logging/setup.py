import sys
import logging
from typing import Any, Optional

from loguru import logger

from codehunt.config.settings import AppSettings, settings as default_settings

SENSITIVE_KEYS = ["key", "token", "password", "secret", "code"]


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return "********"


def make_sensitive_data_filter(settings: AppSettings):
    """Builds a filter that masks configured secrets in log records."""
    secrets = [
        settings.admin_password.get_secret_value(),
        settings.supabase_key,
    ]

    def sensitive_data_filter(record: dict[str, Any]) -> bool:
        # Mask 'extra' values bound under sensitive names, e.g. logger.bind(password=...)
        extra = record.get("extra")
        if isinstance(extra, dict):
            for extra_key, extra_value in extra.items():
                if isinstance(extra_value, str) and any(
                    sk in extra_key.lower() for sk in SENSITIVE_KEYS
                ):
                    extra[extra_key] = _mask(extra_value)

        for original in secrets:
            if original and original in record["message"]:
                record["message"] = record["message"].replace(original, "********")

        return True  # Keep the record after masking

    return sensitive_data_filter


class InterceptHandler(logging.Handler):
    """Routes standard logging records (httpx, postgrest...) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(settings: Optional[AppSettings] = None) -> None:
    """Configures Loguru logger based on application settings."""
    settings = settings or default_settings
    log_filter = make_sensitive_data_filter(settings)

    logger.remove()  # Remove default handler

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
        filter=log_filter,
    )

    if settings.log_file:
        logger.add(
            str(settings.log_file),
            level="DEBUG",  # Log everything to file
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            serialize=True,
            filter=log_filter,
        )
        logger.info(f"File logging enabled at {settings.log_file}")

    logger.info(f"Logging initialized with level: {settings.log_level}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug("Standard logging intercepted.")
