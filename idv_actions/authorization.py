"""Scope-based authorization of hook calls with a bearer JWT."""

from functools import wraps
from http import HTTPStatus
from flask import request, current_app, jsonify
import jwt

from typing import Any, Callable

from . import logging

logger = logging.getLogger(__name__)

INVALID_TOKEN = {'reason': 'Invalid authorization token'}
INVALID_SCOPE = {'reason': 'Token not authorized for this action'}


def _bearer_token() -> str:
    header = request.headers.get('Authorization', '')
    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == 'bearer':
        return parts[1]
    return header


def scoped(scope: str) -> Callable[[Any], Any]:
    """Generate a decorator to enforce scope authorization."""
    def protector(func: Callable[..., Any]) -> Callable[..., Any]:
        """Decorator that provides scope enforcement."""
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            """Check the authorization token before executing the method."""
            secret = current_app.config.get('HOOK_JWT_SECRET')
            try:
                decoded = jwt.decode(_bearer_token(), secret,
                                     algorithms=['HS256'])
            except jwt.exceptions.PyJWTError as e:
                logger.debug('Rejected hook token: %s', e)
                return jsonify(INVALID_TOKEN), HTTPStatus.FORBIDDEN, {}
            scopes = decoded.get('scope') or []
            if isinstance(scopes, str):
                scopes = scopes.split()
            if scope not in scopes:
                return jsonify(INVALID_SCOPE), HTTPStatus.FORBIDDEN, {}
            return func(*args, **kwargs)
        return wrapper
    return protector
