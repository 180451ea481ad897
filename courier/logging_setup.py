from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_LOG_FILENAME = "courier.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_log_path(log_path: Path | None = None) -> Path:
    """Return absolute path for the log file."""
    if log_path is None:
        return Path.cwd() / DEFAULT_LOG_FILENAME
    return Path(log_path).expanduser().resolve()


def _handler_uses_path(handler: logging.Handler, path: Path) -> bool:
    file_name = getattr(handler, "baseFilename", None)
    if not file_name:
        return False
    try:
        return Path(file_name).resolve() == path
    except OSError:
        return False


def configure_logging(debug_enabled: bool, log_path: Path | None = None) -> Path | None:
    """Send DEBUG records to a log file; the terminal belongs to the UI, so nothing goes to stderr."""
    if not debug_enabled:
        return None

    path = _resolve_log_path(log_path)
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if any(_handler_uses_path(existing, path) for existing in root.handlers):
        return path

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    logging.getLogger(__name__).debug("Debug logging enabled. Writing to %s", path)
    return path
