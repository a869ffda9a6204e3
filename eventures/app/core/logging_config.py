"""
Logging setup for the server and the command-line client.

Both entry points call ``setup_logging`` once at start‑up; library
modules only ever do ``logging.getLogger(__name__)``.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"warning"``.  Unknown names
        fall back to ``INFO``.
    logfile : Optional[str]
        Also write records to this file.  Missing parent directories
        are created.

    Does nothing if the root logger already has handlers, e.g. under
    pytest or when ``create_app`` runs more than once.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # Keep per-request access lines out of INFO output.
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.WARNING))
