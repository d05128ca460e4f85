"""Logging for the identity verification hooks."""

import logging
import sys
from typing import Any, Optional, Union

from pythonjsonlogger import jsonlogger

TEXT_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
JSON_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'

_handler: Optional[logging.Handler] = None


def _level(value: Union[str, int]) -> Optional[int]:
    """Resolve a level number or name; ``None`` if it is neither."""
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    level = logging.getLevelName(str(value).upper())
    return level if isinstance(level, int) else None


def setup_logger(level: Union[str, int] = 'INFO', fmt: str = 'json') -> None:
    """
    Attach a single stream handler to the ``idv_actions`` logger tree.

    An unrecognized ``level`` falls back to ``INFO`` with a warning.
    """
    global _handler
    root = logging.getLogger('idv_actions')
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stdout)
    if fmt == 'json':
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            JSON_FORMAT,
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    _handler.setFormatter(formatter)
    root.addHandler(_handler)

    resolved = _level(level)
    root.setLevel(logging.INFO if resolved is None else resolved)
    if resolved is None:
        root.warning('Unknown log level %r; using INFO', level)


def init_app(app: Any) -> None:
    """Configure logging from the application config."""
    app.config.setdefault('LOGLEVEL', 'INFO')
    app.config.setdefault('LOGFORMAT', 'json')
    setup_logger(app.config['LOGLEVEL'], app.config['LOGFORMAT'])


def getLogger(name: str) -> logging.Logger:
    """Get a logger; modules in this package log through the shared handler."""
    return logging.getLogger(name)
