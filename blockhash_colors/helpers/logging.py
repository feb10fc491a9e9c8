"""Logger module."""

import logging
from pathlib import Path
import sys

import colorlog

loggers: dict[str, logging.Logger] = {}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _resolve_level(log_level: str) -> int:
    if log_level not in LOG_LEVELS:
        err_msg = f"Invalid log level: {log_level}"
        raise ValueError(err_msg)
    return LOG_LEVELS[log_level]


def _file_handler(log_file: str | Path, level: int) -> logging.FileHandler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def get_logger(
    name: str,
    log_handler: str = "stdout",
    log_level: str = "INFO",
    log_color: bool = False,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Get logger.

    Args:
        name: The name of the logger.
        log_handler: The log handler type ('stdout' or 'file').
        log_level: The logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
        log_color: Whether to use colored output.
        log_file: Path of the log file, required when log_handler is 'file'.

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    logger = logging.getLogger(name) if not log_color else colorlog.getLogger(name)

    level = _resolve_level(log_level)

    handler: logging.Handler
    if log_handler == "stdout" and not log_color:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    elif log_handler == "stdout" and log_color:
        handler = colorlog.StreamHandler(sys.stdout)
        handler.setFormatter(
            colorlog.ColoredFormatter(
                f"%(log_color)s {LOG_FORMAT}",
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            )
        )
    elif log_handler == "file" and log_file is not None:
        handler = _file_handler(log_file, level)
    else:
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    logger.setLevel(level)
    handler.setLevel(level)
    logger.addHandler(handler)

    loggers[name] = logger
    return logger


def configure_logging(
    log_level: str = "INFO", log_file: str | Path | None = None
) -> None:
    """Apply a level and an optional log file to every registered logger.

    Module loggers are created at import time, so the CLI uses this to
    retune them once arguments are parsed. The cron runner points
    ``log_file`` at ``logs/cron.log`` so each run is appended there as well
    as printed to stdout.

    Args:
        log_level: The logging level applied to loggers and their handlers.
        log_file: Optional path of a file that receives every record.

    Raises:
        ValueError: If an invalid log level is provided.
    """
    level = _resolve_level(log_level)
    file_path = Path(log_file).resolve() if log_file is not None else None

    for logger in loggers.values():
        logger.setLevel(level)
        has_file = False
        for handler in logger.handlers:
            handler.setLevel(level)
            if (
                isinstance(handler, logging.FileHandler)
                and file_path is not None
                and Path(handler.baseFilename) == file_path
            ):
                has_file = True
        if file_path is not None and not has_file:
            logger.addHandler(_file_handler(file_path, level))
