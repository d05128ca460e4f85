"""Tests for :mod:`idv_actions.factory`."""

from unittest import TestCase, mock
from urllib.parse import urlsplit, parse_qs
import os
from typing import Any

from idv_actions.controllers import post_login
from idv_actions.domain import Applicant
from idv_actions.factory import create_web_app

EVENT = {
    'user': {
        'user_id': 'auth0|1234',
        'email': 'jane@example.com',
        'given_name': 'Jane',
        'family_name': 'Doe',
        'app_metadata': {}
    },
    'request': {'ip': '10.1.2.3', 'hostname': 'login.example.com'}
}


class TestCreateWebApp(TestCase):
    """Apps built without explicit secrets still agree with each other."""

    def setUp(self) -> None:
        environ = mock.patch.dict(os.environ)
        environ.start()
        self.addCleanup(environ.stop)
        for name in ('SESSION_TOKEN_SECRET', 'HOOK_JWT_SECRET'):
            os.environ.pop(name, None)

    def test_default_secrets_match(self) -> None:
        """Two apps get the same development secrets."""
        first, second = create_web_app(), create_web_app()
        for name in ('SESSION_TOKEN_SECRET', 'HOOK_JWT_SECRET'):
            self.assertEqual(first.config[name], second.config[name])

    def test_missing_secrets_are_logged(self) -> None:
        """Falling back to the development secrets is logged as an error."""
        with self.assertLogs('idv_actions.factory', 'ERROR') as logs:
            create_web_app()
        output = '\n'.join(logs.output)
        self.assertIn('SESSION_TOKEN_SECRET is not set', output)
        self.assertIn('HOOK_JWT_SECRET is not set', output)

    @mock.patch('idv_actions.actions.onfido.session_for')
    def test_token_crosses_workers(self, mock_session_for: Any) -> None:
        """A token issued by one app is accepted by another."""
        session = mock.MagicMock()
        session.create_applicant.return_value = Applicant('applicant-1')
        mock_session_for.return_value = session

        with create_web_app().app_context():
            data, status_code, _ = post_login.execute(EVENT)
        self.assertEqual(status_code, 200)
        redirect = data['commands'][-1]
        self.assertEqual(redirect['type'], 'redirect')
        token = parse_qs(urlsplit(redirect['url']).query)['session_token'][0]

        returning = {
            'user': dict(EVENT['user'],
                         app_metadata={'applicantId': 'applicant-1'}),
            'request': dict(EVENT['request'],
                            query={'session_token': token})
        }
        with create_web_app().app_context():
            data, status_code, _ = post_login.resume(returning)
        self.assertEqual(status_code, 200)
        self.assertEqual(data['commands'], [{'type': 'set_app_metadata',
                                             'key': 'idvVerified',
                                             'value': True}])
