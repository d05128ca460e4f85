"""
The API object handed to post-login hooks.

Hooks never act on the identity platform directly. Each call they make here
is recorded as a command, and the caller that invoked the hook applies the
commands in order once the hook returns.
"""

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl

from . import tokens
from .domain import PostLoginEvent
from .exceptions import InvalidToken
from . import logging

logger = logging.getLogger(__name__)

Command = Dict[str, Any]

DENY = 'deny'
SET_APP_METADATA = 'set_app_metadata'
REDIRECT = 'redirect'


def add_query(url: str, query: Mapping[str, Any]) -> str:
    """Merge ``query`` into the query string of ``url``."""
    parts = urlsplit(url)
    params = parse_qsl(parts.query, keep_blank_values=True)
    params = [(k, v) for k, v in params if k not in query]
    params.extend((k, str(v)) for k, v in query.items())
    return urlunsplit(parts._replace(query=urlencode(params)))


class Access(object):
    """Access control for the login in progress."""

    def __init__(self, api: 'PostLoginAPI') -> None:
        self._api = api

    def deny(self, reason: str) -> None:
        """Deny the login with a user-facing ``reason``."""
        logger.info('Denying login for %s: %s', self._api.event.user.user_id,
                    reason)
        self._api.denied = True
        self._api.commands.append({'type': DENY, 'reason': reason})


class UserMetadata(object):
    """Mutations of the user record."""

    def __init__(self, api: 'PostLoginAPI') -> None:
        self._api = api

    def set_app_metadata(self, key: str, value: Any) -> None:
        """Set ``key`` to ``value`` in the user's ``app_metadata``."""
        self._api.commands.append({'type': SET_APP_METADATA, 'key': key,
                                   'value': value})


class Redirect(object):
    """Sending the user elsewhere mid-login, and trusting them on return."""

    def __init__(self, api: 'PostLoginAPI') -> None:
        self._api = api

    def encode_token(self, secret: str, expires_in_seconds: int,
                     payload: Dict[str, Any]) -> str:
        """
        Sign ``payload`` for the round trip.

        The current user is bound to the token as its subject.
        """
        claims = dict(payload)
        claims['sub'] = self._api.event.user.user_id
        return tokens.encode(claims, secret, expires_in=expires_in_seconds)

    def send_user_to(self, url: str,
                     query: Optional[Mapping[str, Any]] = None) -> None:
        """Pause the login and send the user to ``url``."""
        if self._api.denied:
            logger.debug('Login already denied; not redirecting')
            return
        if query:
            url = add_query(url, query)
        self._api.commands.append({'type': REDIRECT, 'url': url})

    def validate_token(self, secret: str, token_parameter_name: str,
                       issuer: Optional[str] = None,
                       audience: Optional[str] = None) -> Dict[str, Any]:
        """
        Validate the token the user came back with.

        The token is read from the query string, then from the request body.

        Raises
        ------
        :class:`.TokenValidationFailed`
        """
        request = self._api.event.request
        token = request.query.get(token_parameter_name) \
            or request.body.get(token_parameter_name)
        if not isinstance(token, str):
            raise InvalidToken(f'No {token_parameter_name} on the request')
        return tokens.decode(token, secret, audience=audience, issuer=issuer,
                             subject=self._api.event.user.user_id)


class PostLoginAPI(object):
    """Records the commands issued by a hook for one login attempt."""

    def __init__(self, event: PostLoginEvent) -> None:
        self.event = event
        self.commands: List[Command] = []
        self.denied = False
        self.access = Access(self)
        self.user = UserMetadata(self)
        self.redirect = Redirect(self)
