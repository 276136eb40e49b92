"""Logging setup: rich console output plus a timestamped action log."""

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("unboundsetup")


def fallback_log_path(log_file: Path) -> Path:
    """User-writable location for the action log, under XDG_STATE_HOME."""
    state_home = os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state"
    return Path(state_home) / "unbound-setup" / Path(log_file).name


def _open_log(path: Path) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path)


def configure_logging(
    log_file: Path | None = None,
    verbose: bool = False,
    debug: bool = False,
    console: Console | None = None,
) -> logging.Logger:
    """
    Configure the package logger.

    The console handler shows warnings unless verbose or debug is set.
    The file handler records every action event at INFO or finer. When
    log_file cannot be opened (the default lives in /var/log, which only
    root can write) the log goes to fallback_log_path instead; only if
    that fails too does logging continue on the console alone.
    """
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    console_handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    if debug:
        console_handler.setLevel(logging.DEBUG)
    elif verbose:
        console_handler.setLevel(logging.INFO)
    else:
        console_handler.setLevel(logging.WARNING)
    logger.addHandler(console_handler)

    if log_file is None:
        return logger

    log_file = Path(log_file)
    errors = []
    for path in (log_file, fallback_log_path(log_file)):
        try:
            file_handler = _open_log(path)
        except OSError as e:
            errors.append(f"{path}: {e}")
            continue

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
        if path != log_file:
            logger.info("Cannot write %s, action log is %s", log_file, path)
        break
    else:
        logger.warning("Cannot write log file: %s", "; ".join(errors))

    return logger
