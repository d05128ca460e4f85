"""Application factory for the post-login hooks service."""

import os

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from . import logging
from .routes import hooks
from .services import onfido

logger = logging.getLogger(__name__)

SHARED_SECRETS = ('SESSION_TOKEN_SECRET', 'HOOK_JWT_SECRET')
"""Secrets that every worker and the identity platform must agree on."""


def jsonify_exception(error: HTTPException) -> tuple:
    """Render an HTTP error as JSON with a ``reason``."""
    response = jsonify(reason=error.description)
    response.status_code = error.code or 500
    return response


def create_web_app() -> Flask:
    """Initialize and configure the hooks application."""
    app = Flask('idv_actions')
    app.config.from_pyfile('config.py')

    logging.init_app(app)
    onfido.init_app(app)

    for name in SHARED_SECRETS:
        if name not in os.environ:
            logger.error('%s is not set; using the development default',
                         name)

    app.register_blueprint(hooks.blueprint)
    app.register_error_handler(HTTPException, jsonify_exception)
    return app
