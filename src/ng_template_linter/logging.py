from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "ng_template_linter"


@dataclass
class LogConfig:
    log_level: int = logging.WARNING
    log_file: Path | str | None = None
    file_level: int = logging.DEBUG
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: LogConfig | None = None) -> logging.Logger:
    if config is None:
        config = LogConfig()

    logger = logging.getLogger(LOGGER_NAME)
    level = config.log_level
    if config.log_file:
        level = min(level, config.file_level)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    # Console handler
    ch = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
    )
    ch.setLevel(config.log_level)
    ch.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(ch)

    # File handler
    if config.log_file:
        fh = logging.FileHandler(config.log_file)
        fh.setLevel(config.file_level)
        fh.setFormatter(logging.Formatter(config.format))
        logger.addHandler(fh)

    return logger
