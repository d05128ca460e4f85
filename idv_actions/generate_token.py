"""
Helper script for generating tokens to exercise the hooks by hand.

Be sure that you are using the same secrets when running this script as when
you run the app. Set ``SESSION_TOKEN_SECRET`` and ``HOOK_JWT_SECRET`` in your
environment.

.. code-block:: bash

   $ SESSION_TOKEN_SECRET=foosecret generate-session-token \
       --user_id "auth0|1234" --applicant_id 9f1b... --hostname login.example.com

   eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9...

Post the token as ``session_token`` in the ``request.query`` of an event sent
to ``/actions/post-login/continue``. Use ``--hook`` to print a bearer token for
the ``Authorization`` header instead.
"""

import os
import uuid
from datetime import datetime, timedelta

import click
import jwt
from pytz import UTC

from idv_actions import config, tokens
from idv_actions.config import SESSION_TOKEN_AUDIENCE, SESSION_TOKEN_EXPIRY


def hook_token(secret: str, expires_in: int = 3600) -> str:
    """Generate a bearer token allowed to call the hook endpoints."""
    now = datetime.now(tz=UTC)
    claims = {
        'jti': str(uuid.uuid4()),
        'scope': ['execute:post-login'],
        'iat': now,
        'exp': now + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, secret, algorithm='HS256')


@click.command()
@click.option('--hook', is_flag=True, default=False,
              help='Print a bearer token for the hook endpoints instead.')
@click.option('--user_id', default='')
@click.option('--applicant_id', default='')
@click.option('--hostname', default='login.example.com')
@click.option('--audience', default=SESSION_TOKEN_AUDIENCE)
@click.option('--expires_in', default=SESSION_TOKEN_EXPIRY, type=int)
def generate_token(hook: bool, user_id: str, applicant_id: str,
                   hostname: str = 'login.example.com',
                   audience: str = SESSION_TOKEN_AUDIENCE,
                   expires_in: int = SESSION_TOKEN_EXPIRY) -> None:
    """Generate a session token for dev/testing purposes."""
    if hook:
        click.echo(hook_token(os.environ.get('HOOK_JWT_SECRET',
                                             config.HOOK_JWT_SECRET)))
        return
    if not user_id or not applicant_id:
        raise click.UsageError('Both --user_id and --applicant_id are needed')
    token = tokens.encode({'iss': f'https://{hostname}/',
                           'aud': audience,
                           'sub': user_id,
                           'applicant_id': applicant_id},
                          os.environ.get('SESSION_TOKEN_SECRET',
                                         config.SESSION_TOKEN_SECRET),
                          expires_in=expires_in)
    click.echo(token)


if __name__ == '__main__':
    generate_token()
