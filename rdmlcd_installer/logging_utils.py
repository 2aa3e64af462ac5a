from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Tuple

from .lib.env import DEFAULTS

DEFAULT_LOG_PATH = DEFAULTS.log_default
FALLBACK_LOG_NAME = "rdmlcd-install.log"

_FILE_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
# The plugin manager shows stdout verbatim in its install dialog.
_CONSOLE_FORMAT = logging.Formatter(fmt="%(message)s")


def _open_log_file(log_path: str) -> Tuple[logging.Handler, str]:
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure root logging once per process.

    Status lines go to the log file and to stdout, where they share a stream
    with the end sentinel. When the log file cannot be opened (e.g. running
    unprivileged during development) a file in the working directory is used.

    Returns the log file path actually in use.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_rdmlcd_configured", False):
        return getattr(root, "_rdmlcd_log_path", log_path)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setFormatter(_FILE_FORMAT)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(_CONSOLE_FORMAT)
        root.addHandler(console)

    setattr(root, "_rdmlcd_configured", True)
    setattr(root, "_rdmlcd_log_path", chosen_path)

    if chosen_path != log_path:
        logging.getLogger(__name__).warning("Cannot write %s; logging to %s", log_path, chosen_path)
    return chosen_path
