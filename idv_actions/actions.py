"""
Post-login hooks that gate a login on Onfido identity verification.

:func:`on_execute_post_login` runs on every login. Users who have not yet
verified their identity are given an Onfido applicant and sent to the hosted
verification page, carrying a session token that binds this login to that
applicant. When they come back, :func:`on_continue_post_login` validates the
token and marks them verified. A user only ever moves from pending to
verified through a token that validates.
"""

from typing import Any, Dict

from . import domain
from .api import PostLoginAPI
from .context import get_application_config
from .domain import PostLoginEvent
from .exceptions import OnfidoError, TokenEncodingFailed, \
    TokenValidationFailed
from .services import onfido
from .tokens import DEFAULT_EXPIRY
from . import logging

logger = logging.getLogger(__name__)

START_FAILED = 'Identity verification could not be started. ' \
    'Please try again later.'
VERIFICATION_FAILED = 'Your ID verification failed. Please contact support.'


def _token_settings() -> Dict[str, Any]:
    config = get_application_config()
    return {
        'expiry': int(config.get('SESSION_TOKEN_EXPIRY', DEFAULT_EXPIRY)),
        'audience': config.get('SESSION_TOKEN_AUDIENCE', 'urn:idv:onfido'),
        'param': config.get('SESSION_TOKEN_PARAM', 'session_token'),
    }


def _ensure_applicant(event: PostLoginEvent) -> str:
    """Get the id of the user's applicant, creating one if needed."""
    session = onfido.session_for(event.secrets)
    applicant_id = event.user.applicant_id
    if applicant_id:
        applicant = session.retrieve_applicant(applicant_id)
        if applicant is not None:
            return applicant.applicant_id
        logger.warning('Applicant %s for user %s no longer exists',
                       applicant_id, event.user.user_id)

    applicant = session.create_applicant(
        first_name=event.user.given_name,
        last_name=event.user.family_name,
        email=event.user.email,
        ip_address=event.request.ip
    )
    return applicant.applicant_id


def on_execute_post_login(event: PostLoginEvent, api: PostLoginAPI) -> None:
    """Send users who have not verified their identity off to Onfido."""
    if event.user.idv_verified:
        logger.debug('User %s already verified', event.user.user_id)
        return

    settings = _token_settings()
    try:
        applicant_id = _ensure_applicant(event)
        api.user.set_app_metadata(domain.APPLICANT_ID, applicant_id)
        token = api.redirect.encode_token(
            secret=event.secrets.session_token_secret,
            expires_in_seconds=settings['expiry'],
            payload={
                'iss': event.request.issuer,
                'aud': settings['audience'],
                'applicant_id': applicant_id,
            }
        )
    except OnfidoError as e:
        logger.error('Onfido call failed for user %s: %s',
                     event.user.user_id, e)
        api.access.deny(e.provider_message or START_FAILED)
        return
    except TokenEncodingFailed as e:
        logger.error('Could not encode session token: %s', e)
        api.access.deny(START_FAILED)
        return
    except Exception:
        logger.exception('Unexpected error starting verification for %s',
                         event.user.user_id)
        api.access.deny(START_FAILED)
        return

    api.redirect.send_user_to(event.secrets.onfido_base_url,
                              query={settings['param']: token})


def on_continue_post_login(event: PostLoginEvent, api: PostLoginAPI) -> None:
    """Mark the user verified if they came back with a valid token."""
    settings = _token_settings()
    try:
        claims = api.redirect.validate_token(
            secret=event.secrets.session_token_secret,
            token_parameter_name=settings['param'],
            issuer=event.request.issuer,
            audience=settings['audience']
        )
    except TokenValidationFailed as e:
        logger.info('Session token rejected for user %s: %s',
                    event.user.user_id, e)
        api.access.deny(VERIFICATION_FAILED)
        return

    expected = event.user.applicant_id
    if expected and claims.get('applicant_id') != expected:
        logger.info('Session token for user %s names another applicant',
                    event.user.user_id)
        api.access.deny(VERIFICATION_FAILED)
        return

    api.user.set_app_metadata(domain.IDV_VERIFIED, True)
