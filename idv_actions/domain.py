"""Defines the core data structures for the post-login verification hooks."""

from typing import Any, Dict, Mapping, NamedTuple, Optional
from datetime import datetime

import dateutil.parser

from .exceptions import InvalidEvent

APPLICANT_ID = 'applicantId'
"""Metadata key caching the Onfido applicant for repeat logins."""

IDV_VERIFIED = 'idvVerified'
"""Metadata key marking that identity verification has completed."""


class Region:
    """Onfido data regions and their API hosts."""

    EU = 'EU'
    US = 'US'
    CA = 'CA'

    DEFAULT = EU

    HOSTS = {
        EU: 'https://api.eu.onfido.com',
        US: 'https://api.us.onfido.com',
        CA: 'https://api.ca.onfido.com',
    }


class User(NamedTuple):
    """The authenticated user, as seen by the post-login hooks."""

    user_id: str
    app_metadata: Mapping[str, Any]
    """Metadata owned by the identity platform; mutated via commands only."""

    email: str = ''
    given_name: str = ''
    family_name: str = ''

    @property
    def applicant_id(self) -> Optional[str]:
        """The cached Onfido applicant id, if any."""
        return self.app_metadata.get(APPLICANT_ID) or None

    @property
    def idv_verified(self) -> bool:
        """Whether identity verification has already completed."""
        return self.app_metadata.get(IDV_VERIFIED) is True


class RequestContext(NamedTuple):
    """Details of the login request."""

    query: Mapping[str, Any]
    body: Mapping[str, Any]
    ip: str = ''
    hostname: str = ''

    @property
    def issuer(self) -> str:
        """The token issuer URL for this tenant hostname."""
        return f'https://{self.hostname}/'


class Secrets(NamedTuple):
    """Provider credentials and the session token signing secret."""

    onfido_base_url: str
    onfido_region: str
    onfido_api_token: str
    session_token_secret: str


class PostLoginEvent(NamedTuple):
    """Everything a post-login hook is handed for one login attempt."""

    user: User
    request: RequestContext
    secrets: Secrets


class Applicant(NamedTuple):
    """An Onfido applicant, i.e. one user's verification case."""

    applicant_id: str
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    created_at: Optional[datetime] = None


def _mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Copy an optional object-valued field; anything else is invalid."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidEvent(f'{key} must be an object')
    return dict(value)


def user_from_dict(data: Dict[str, Any]) -> User:
    """Build a :class:`.User` from the platform's user record."""
    user_id = data.get('user_id')
    if not user_id:
        raise InvalidEvent('Event has no user_id')
    return User(
        user_id=str(user_id),
        email=data.get('email') or '',
        given_name=data.get('given_name') or '',
        family_name=data.get('family_name') or '',
        app_metadata=_mapping(data, 'app_metadata')
    )


def request_from_dict(data: Dict[str, Any]) -> RequestContext:
    """Build a :class:`.RequestContext` from the platform's request data."""
    return RequestContext(
        ip=data.get('ip') or '',
        hostname=data.get('hostname') or '',
        query=_mapping(data, 'query'),
        body=_mapping(data, 'body')
    )


def event_from_dict(data: Dict[str, Any], secrets: Secrets) -> PostLoginEvent:
    """
    Build a :class:`.PostLoginEvent` from a posted payload.

    Secrets never travel with the payload; they are supplied from config.

    Raises
    ------
    :class:`.InvalidEvent`
        If the payload has no user, the user has no id, or a field that
        should hold an object holds something else.
    """
    if not isinstance(data, dict) or not isinstance(data.get('user'), dict):
        raise InvalidEvent('Event has no user')
    return PostLoginEvent(
        user=user_from_dict(data['user']),
        request=request_from_dict(_mapping(data, 'request')),
        secrets=secrets
    )


def applicant_from_dict(data: Dict[str, Any]) -> Applicant:
    """Build an :class:`.Applicant` from an Onfido API response body."""
    created_at = data.get('created_at')
    return Applicant(
        applicant_id=data['id'],
        first_name=data.get('first_name') or '',
        last_name=data.get('last_name') or '',
        email=data.get('email') or '',
        created_at=dateutil.parser.parse(created_at) if created_at else None
    )
