"""
Functions for working with the session tokens that carry a login across the
verification redirect.

A session token is a short-lived HS256 JWT. It is issued when the user is sent
off to the hosted verification page and must come back, unaltered and
unexpired, on the request that resumes the login.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timedelta

from pytz import UTC
import jwt

from .exceptions import ExpiredToken, InvalidToken, TokenEncodingFailed

ALGORITHM = 'HS256'
DEFAULT_EXPIRY = 300


def encode(payload: Dict[str, Any], secret: str,
           expires_in: int = DEFAULT_EXPIRY) -> str:
    """
    Sign ``payload`` as a JWT that expires after ``expires_in`` seconds.

    Parameters
    ----------
    payload : dict
        Claims to sign. ``iat`` and ``exp`` are added.
    secret : str
    expires_in : int

    Returns
    -------
    str

    Raises
    ------
    :class:`.TokenEncodingFailed`
        If the secret is empty or the payload cannot be serialized.
    """
    if not secret:
        raise TokenEncodingFailed('No secret configured for session tokens')
    now = datetime.now(tz=UTC)
    claims = dict(payload)
    claims.update({'iat': now, 'exp': now + timedelta(seconds=expires_in)})
    try:
        token: str = jwt.encode(claims, secret, algorithm=ALGORITHM)
    except (TypeError, ValueError, jwt.exceptions.PyJWTError) as e:
        raise TokenEncodingFailed(f'Could not encode token: {e}') from e
    return token


def decode(token: Optional[str], secret: str,
           audience: Optional[str] = None,
           issuer: Optional[str] = None,
           subject: Optional[str] = None) -> Dict[str, Any]:
    """
    Validate a session token and return its claims.

    Signature and expiry are always checked. ``audience``, ``issuer`` and
    ``subject`` are checked when given.

    Raises
    ------
    :class:`.ExpiredToken`
    :class:`.InvalidToken`
    """
    if not token:
        raise InvalidToken('No token provided')
    if not secret:
        raise InvalidToken('No secret configured for session tokens')
    options = {'require': ['exp', 'iat'], 'verify_aud': audience is not None}
    try:
        claims: Dict[str, Any] = jwt.decode(token, secret,
                                            algorithms=[ALGORITHM],
                                            audience=audience, issuer=issuer,
                                            options=options)
    except jwt.exceptions.ExpiredSignatureError as e:
        raise ExpiredToken('Token has expired') from e
    except jwt.exceptions.PyJWTError as e:
        raise InvalidToken(f'Not a valid token: {e}') from e

    if subject is not None and claims.get('sub') != subject:
        raise InvalidToken('Token subject does not match')
    return claims
