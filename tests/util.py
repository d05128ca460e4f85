"""Helpers for building hook events in tests."""

from idv_actions.domain import PostLoginEvent, RequestContext, Secrets, User

SECRET = 'a-session-token-secret-long-enough-for-hs256'


def make_event(query=None, body=None, **metadata):
    """Build a login event for Jane Doe with ``metadata`` on her record."""
    return PostLoginEvent(
        user=User(user_id='auth0|1234', email='jane@example.com',
                  given_name='Jane', family_name='Doe',
                  app_metadata=dict(metadata)),
        request=RequestContext(ip='10.1.2.3', hostname='login.example.com',
                               query=query or {}, body=body or {}),
        secrets=Secrets(onfido_base_url='https://id.example.com/verify',
                        onfido_region='EU',
                        onfido_api_token='footoken',
                        session_token_secret=SECRET)
    )
