"""Log sink configuration for hosts embedding the fitplan pipeline.

Pipeline modules only emit through loguru's global logger and never add
sinks themselves. A host process calls configure_pipeline_logging() (or
setup_logger_from_settings()) once at startup.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from fitplan.config.settings import Settings

COMPONENT = "fitplan"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[component]}</magenta> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
# Keyword context passed to logger calls (counts, reason codes) lands in {extra}
FILE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} | {level: <8} | {name}:{function}:{line} | {message} | {extra}"


def _console_handler(level: str) -> dict[str, Any]:
    return {"sink": sys.stderr, "format": CONSOLE_FORMAT, "level": level, "colorize": True}


def _file_handler(log_file: str, level: str, rotation: str, retention: str) -> dict[str, Any]:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return {
        "sink": log_path,
        "format": FILE_FORMAT,
        "level": level,
        "rotation": rotation,
        "retention": retention,
        "encoding": "utf-8",
        "diagnose": False,
    }


def configure_pipeline_logging(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> list[int]:
    """Replace all loguru sinks with the pipeline's console and file sinks.

    Args:
        level: Minimum level for every sink
        log_file: Optional file path; parent directories are created
        rotation: File rotation condition (e.g., "10 MB", "1 day")
        retention: How long rotated files are kept (e.g., "7 days")

    Returns:
        Handler ids, so a host can remove individual sinks later
    """
    handlers = [_console_handler(level)]
    if log_file:
        handlers.append(_file_handler(log_file, level, rotation, retention))

    handler_ids = logger.configure(handlers=handlers, extra={"component": COMPONENT})
    logger.debug("Pipeline logging configured", level=level, file_sink=bool(log_file))
    return handler_ids


def setup_logger_from_settings(settings: Settings) -> list[int]:
    return configure_pipeline_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
