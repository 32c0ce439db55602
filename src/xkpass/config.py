from datetime import timedelta
import logging
from pathlib import Path
import sys

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    log_level: str = "INFO"
    log_file_path: Path | None = None
    log_rotation: str = "10 MB"
    log_retention: timedelta = timedelta(days=7)
    word_list_path: Path | None = None  # newline-delimited, one word per line

    model_config = SettingsConfigDict(env_prefix="XKPASS_")


config = Config()


class InterceptHandler(logging.Handler):
    """Forwards stdlib ``logging`` records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # skip frames inside the logging module itself
        frame, depth = logging.currentframe(), 2
        while frame.f_back and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(settings: Config | None = None) -> list[int]:
    """Route stdlib logging into loguru and install the configured sinks.

    Importing xkpass never touches logging; applications call this once.
    Returns the ids of the loguru sinks that were added.
    """
    settings = settings or config

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.remove()
    sink_ids = [
        logger.add(
            sys.stderr,
            level=settings.log_level,
            backtrace=True,
            diagnose=False,
        )
    ]

    if settings.log_file_path is not None:
        settings.log_file_path.parent.mkdir(exist_ok=True, parents=True)
        sink_ids.append(
            logger.add(
                settings.log_file_path.resolve(),
                rotation=settings.log_rotation,
                retention=settings.log_retention,
                backtrace=True,
                diagnose=False,
                level=settings.log_level,
            )
        )

    logger.debug(f"Logging configured at level {settings.log_level}")
    return sink_ids
