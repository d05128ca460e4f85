"""
Controllers for the post-login hook endpoints.

The identity platform posts the login event as JSON. The controllers add the
secrets from config, run the hook, and return the commands it issued.
"""

from http import HTTPStatus
from typing import Any, Callable, Dict, Tuple

from .. import actions, domain
from ..api import PostLoginAPI
from ..context import get_application_config
from ..domain import PostLoginEvent, Secrets
from ..exceptions import InvalidEvent
from .. import logging

logger = logging.getLogger(__name__)

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]

Hook = Callable[[PostLoginEvent, PostLoginAPI], None]


def _secrets() -> Secrets:
    config = get_application_config()
    return Secrets(
        onfido_base_url=config.get('ONFIDO_BASE_URL', ''),
        onfido_region=config.get('ONFIDO_REGION', domain.Region.DEFAULT),
        onfido_api_token=config.get('ONFIDO_API_TOKEN', ''),
        session_token_secret=config.get('SESSION_TOKEN_SECRET', '')
    )


def _run(hook: Hook, payload: Any) -> ResponseData:
    try:
        event = domain.event_from_dict(payload, _secrets())
    except InvalidEvent as e:
        logger.debug('Bad event payload: %s', e)
        return {'reason': str(e)}, HTTPStatus.BAD_REQUEST, {}

    api = PostLoginAPI(event)
    hook(event, api)
    return {'commands': api.commands}, HTTPStatus.OK, {}


def execute(payload: Any) -> ResponseData:
    """
    Run :func:`.actions.on_execute_post_login` for a posted login event.

    Parameters
    ----------
    payload : dict
        The login event, with ``user`` and ``request`` keys.

    Returns
    -------
    dict
        ``commands`` issued by the hook, or a ``reason`` on a bad payload.
    int
        Status code: 200, or 400 if the payload has no user.
    dict
        Headers to add to the response.

    """
    return _run(actions.on_execute_post_login, payload)


def resume(payload: Any) -> ResponseData:
    """Run :func:`.actions.on_continue_post_login` for a returning user."""
    return _run(actions.on_continue_post_login, payload)
