import logging
import sys
from typing import Optional

from app.config.settings import get_settings

CONSOLE_HANDLER = "scheduler-console"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Optional[str] = None) -> int:
    """Explicit level, then LOG_LEVEL from settings, then DEBUG/INFO from the debug flag."""
    settings = get_settings()
    name = level or settings.log_level
    if name:
        resolved = logging.getLevelName(name.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {name}")
        return resolved
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach one console handler to the root logger; safe to call repeatedly."""
    log_level = resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    handler = next((h for h in root_logger.handlers if h.get_name() == CONSOLE_HANDLER), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(CONSOLE_HANDLER)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(handler)
    handler.setLevel(log_level)

    # Request lines are noise next to the engine's own logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger
