"""Helpers for getting at application config and globals outside of routes."""

import os
from typing import Any, Mapping, Optional

from flask import current_app, g, has_app_context


def get_application_config(app: Optional[Any] = None) -> Mapping[str, Any]:
    """
    Get a configuration from the current app, or fall back to env.

    Parameters
    ----------
    app : :class:`flask.Flask`

    Returns
    -------
    dict-like
        This is either the current Flask application configuration, or
        ``os.environ``. Either of these should support the ``get()`` method.
    """
    if app is not None:
        return app.config
    if has_app_context():
        return current_app.config
    return os.environ


def get_application_global() -> Optional[Any]:
    """
    Get the current application global proxy object.

    Returns
    -------
    proxy or None
        :data:`flask.g` when inside an application context.
    """
    if has_app_context():
        return g
    return None
