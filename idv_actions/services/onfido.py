"""
Integration with the Onfido identity verification API.

Only the applicant endpoints are used: the hooks look up the applicant cached
on the user, or create one, and hand its id to the hosted verification page
by way of the session token.
"""

from functools import wraps
from typing import Any, Dict, List, Optional

import requests

from ..context import get_application_config, get_application_global
from ..domain import Applicant, Region, Secrets, applicant_from_dict
from ..exceptions import OnfidoError
from .. import logging

logger = logging.getLogger(__name__)

API_VERSION = 'v3.6'

DEFAULT_CONSENTS: List[Dict[str, Any]] = [
    {'name': 'privacy_notices_read', 'granted': True},
]
"""Consent flags recorded with every new applicant."""


def resolve_region(region: Optional[str]) -> str:
    """
    Normalize a region selector.

    Unrecognized values fall back to :attr:`.Region.DEFAULT` with a warning.
    """
    normalized = (region or '').strip().upper()
    if normalized in Region.HOSTS:
        return normalized
    logger.warning('Unknown Onfido region %r; falling back to %s',
                   region, Region.DEFAULT)
    return Region.DEFAULT


def api_url(region: Optional[str]) -> str:
    """Get the versioned API base URL for a region."""
    return f'{Region.HOSTS[resolve_region(region)]}/{API_VERSION}'


def _provider_message(response: requests.Response) -> Optional[str]:
    """Extract ``error.message`` from an Onfido error body, if there is one."""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get('error')
    if isinstance(error, dict) and error.get('message'):
        return str(error['message'])
    return None


class OnfidoSession(object):
    """
    An HTTP session with the Onfido API for one region and API token.

    No retries are mounted: a failed call fails the login attempt, and the
    user starts over.
    """

    def __init__(self, api_token: str, region: str = Region.DEFAULT,
                 timeout: float = 30) -> None:
        """Create a new HTTP session."""
        self.endpoint = api_url(region)
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            'Authorization': f'Token token={api_token}',
            'Accept': 'application/json',
        })
        logger.debug('New OnfidoSession with endpoint = %s', self.endpoint)

    def close(self) -> None:
        """Release the pooled connections of the underlying HTTP session."""
        self._session.close()

    def _path(self, *parts: str) -> str:
        return '/'.join([self.endpoint] + [p.strip('/') for p in parts])

    def _request(self, method: str, path: str, **kwargs: Any) \
            -> requests.Response:
        try:
            return self._session.request(method, self._path(path),
                                         timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise OnfidoError(f'Onfido request failed: {e}') from e

    def _load(self, response: requests.Response) -> Dict[str, Any]:
        if not response.ok:
            message = _provider_message(response)
            logger.debug('Onfido responded with status %i: %s',
                         response.status_code, message)
            raise OnfidoError(
                f'Onfido responded with status {response.status_code}',
                status_code=response.status_code,
                provider_message=message
            )
        try:
            data: Dict[str, Any] = response.json()
        except ValueError as e:
            logger.debug('Onfido response could not be decoded')
            raise OnfidoError('Could not read the Onfido response') from e
        return data

    def status(self) -> bool:
        """Check the availability of the Onfido API."""
        try:
            response = self._session.get(self._path('applicants'),
                                         params={'page': 1, 'per_page': 1},
                                         timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning('Onfido status check failed: %s', e)
            return False
        return bool(response.ok)

    def retrieve_applicant(self, applicant_id: str) -> Optional[Applicant]:
        """
        Look up an existing applicant.

        Parameters
        ----------
        applicant_id : str

        Returns
        -------
        :class:`.Applicant` or None
            None if Onfido no longer knows the applicant.

        Raises
        ------
        :class:`.OnfidoError`
            If there is a problem talking to Onfido.

        """
        logger.debug('Retrieve applicant %s', applicant_id)
        response = self._request('GET', f'applicants/{applicant_id}')
        if response.status_code == requests.codes.not_found:
            return None
        try:
            return applicant_from_dict(self._load(response))
        except KeyError as e:
            raise OnfidoError('Applicant response has no id') from e

    def create_applicant(self, first_name: str, last_name: str, email: str,
                         ip_address: Optional[str] = None,
                         consents: Optional[List[Dict[str, Any]]] = None) \
            -> Applicant:
        """
        Create a new applicant.

        Parameters
        ----------
        first_name : str
        last_name : str
        email : str
        ip_address : str
            IP of the login request; recorded as the applicant's location.
        consents : list
            Consent flags. Defaults to :data:`DEFAULT_CONSENTS`.

        Returns
        -------
        :class:`.Applicant`

        Raises
        ------
        :class:`.OnfidoError`

        """
        payload: Dict[str, Any] = {
            'first_name': first_name,
            'last_name': last_name,
            'email': email,
            'consents': consents if consents is not None else DEFAULT_CONSENTS
        }
        if ip_address:
            payload['location'] = {'ip_address': ip_address}
        response = self._request('POST', 'applicants', json=payload)
        try:
            applicant = applicant_from_dict(self._load(response))
        except KeyError as e:
            raise OnfidoError('Applicant response has no id') from e
        logger.info('Created applicant %s', applicant.applicant_id)
        return applicant


def init_app(app: Any) -> None:
    """Set required configuration defaults, and close sessions on teardown."""
    app.config.setdefault('ONFIDO_REGION', Region.DEFAULT)
    app.config.setdefault('ONFIDO_API_TOKEN', '')
    app.config.setdefault('ONFIDO_REQUEST_TIMEOUT', 30)
    app.teardown_appcontext(close_sessions)


def get_session(app: Optional[Any] = None) -> OnfidoSession:
    """Create a new Onfido session from the application config."""
    config = get_application_config(app)
    return OnfidoSession(config.get('ONFIDO_API_TOKEN', ''),
                         config.get('ONFIDO_REGION', Region.DEFAULT),
                         float(config.get('ONFIDO_REQUEST_TIMEOUT', 30)))


def session_for(secrets: Secrets) -> OnfidoSession:
    """
    Get a session for the credentials handed to a hook.

    When they are the configured credentials this is :func:`current_session`.
    Otherwise a new session is made; inside an application context it is
    closed along with the others on teardown.
    """
    config = get_application_config()
    if secrets.onfido_api_token == config.get('ONFIDO_API_TOKEN', '') \
            and secrets.onfido_region == config.get('ONFIDO_REGION',
                                                    Region.DEFAULT):
        return current_session()
    session = OnfidoSession(secrets.onfido_api_token, secrets.onfido_region,
                            float(config.get('ONFIDO_REQUEST_TIMEOUT', 30)))
    g = get_application_global()
    if g is not None:
        g.setdefault('onfido_extra', []).append(session)
    return session


def current_session(app: Optional[Any] = None) -> OnfidoSession:
    """Get the Onfido session for this context, creating it if needed."""
    g = get_application_global()
    if g is None:
        return get_session(app)
    if 'onfido' not in g:
        g.onfido = get_session(app)
    return g.onfido  # type: ignore


def close_sessions(exception: Optional[BaseException] = None) -> None:
    """Close the sessions opened in this application context."""
    g = get_application_global()
    if g is None:
        return
    sessions = g.pop('onfido_extra', [])
    if 'onfido' in g:
        sessions.append(g.pop('onfido'))
    for session in sessions:
        session.close()


@wraps(OnfidoSession.status)
def status() -> bool:
    """Wrapper for :meth:`OnfidoSession.status`."""
    return current_session().status()
