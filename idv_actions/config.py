"""Flask configuration."""

import os

VERSION = '0.1'

#################### Onfido ####################
ONFIDO_BASE_URL = os.environ.get('ONFIDO_BASE_URL',
                                 'https://id.example.com/verify')
"""Hosted verification page to which users are sent during login.

The session token is appended to this URL as a query parameter."""

ONFIDO_REGION = os.environ.get('ONFIDO_REGION', 'EU')
"""Selects the Onfido API host. One of ``EU``, ``US`` or ``CA``.

Unknown values fall back to ``EU``."""

ONFIDO_API_TOKEN = os.environ.get('ONFIDO_API_TOKEN', '')
"""API token used in the ``Authorization`` header of Onfido requests."""

ONFIDO_REQUEST_TIMEOUT = float(os.environ.get('ONFIDO_REQUEST_TIMEOUT', '30'))


#################### Session tokens ####################
SESSION_TOKEN_SECRET = os.environ.get(
    'SESSION_TOKEN_SECRET', 'dev-session-token-secret-change-me-in-production'
)
"""Shared secret used to sign and validate the redirect session token.

Every worker and the hosted verification page must use the same value."""

SESSION_TOKEN_EXPIRY = int(os.environ.get('SESSION_TOKEN_EXPIRY', '300'))
"""Seconds a user has to complete verification before the round trip is
considered stale."""

SESSION_TOKEN_AUDIENCE = os.environ.get('SESSION_TOKEN_AUDIENCE',
                                        'urn:idv:onfido')

SESSION_TOKEN_PARAM = os.environ.get('SESSION_TOKEN_PARAM', 'session_token')
"""Name of the request parameter that carries the token on both legs."""


#################### Hook endpoints ####################
HOOK_JWT_SECRET = os.environ.get('HOOK_JWT_SECRET',
                                 'dev-hook-jwt-secret-change-me-in-production')
"""Secret for the bearer JWTs the identity platform presents to the hooks."""


#################### Minor configs ##############################
LOGLEVEL = os.environ.get('LOGLEVEL', 'INFO')
LOGFORMAT = os.environ.get('LOGFORMAT', 'json')
"""Either ``json`` or ``text``."""
