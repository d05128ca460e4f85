"""Tests for :mod:`idv_actions.domain`."""

from unittest import TestCase

from idv_actions import domain
from idv_actions.exceptions import InvalidEvent

SECRETS = domain.Secrets('https://id.example.com/verify', 'EU', 'footoken',
                         'barsecret')


class TestEventFromDict(TestCase):
    """Login events are built from posted payloads."""

    def test_full_event(self):
        """All the fields the hooks use are picked up."""
        event = domain.event_from_dict({
            'user': {
                'user_id': 'auth0|1234',
                'email': 'jane@example.com',
                'given_name': 'Jane',
                'family_name': 'Doe',
                'app_metadata': {'applicantId': 'a-1', 'idvVerified': False}
            },
            'request': {'ip': '10.1.2.3', 'hostname': 'login.example.com',
                        'query': {'session_token': 'foo'}}
        }, SECRETS)
        self.assertEqual(event.user.applicant_id, 'a-1')
        self.assertFalse(event.user.idv_verified)
        self.assertEqual(event.request.issuer, 'https://login.example.com/')
        self.assertEqual(event.request.query['session_token'], 'foo')
        self.assertEqual(event.request.body, {})
        self.assertIs(event.secrets, SECRETS)

    def test_sparse_event(self):
        """Only the user id is required."""
        event = domain.event_from_dict({'user': {'user_id': 42}}, SECRETS)
        self.assertEqual(event.user.user_id, '42')
        self.assertIsNone(event.user.applicant_id)
        self.assertFalse(event.user.idv_verified)
        self.assertEqual(event.request.ip, '')

    def test_verified_flag_must_be_true(self):
        """Only a real ``true`` counts as verified."""
        user = domain.user_from_dict({'user_id': 'x',
                                      'app_metadata': {'idvVerified': 'yes'}})
        self.assertFalse(user.idv_verified)

    def test_missing_user(self):
        """Events without a user id are invalid."""
        for payload in (None, {}, {'user': None}, {'user': {'email': 'x'}}):
            with self.assertRaises(InvalidEvent):
                domain.event_from_dict(payload, SECRETS)

    def test_mappings_not_shared(self):
        """Each event gets its own metadata, query and body."""
        first = domain.event_from_dict({'user': {'user_id': 'a'}}, SECRETS)
        second = domain.event_from_dict({'user': {'user_id': 'b'}}, SECRETS)
        self.assertIsNot(first.user.app_metadata, second.user.app_metadata)
        self.assertIsNot(first.request.query, second.request.query)
        self.assertIsNot(first.request.body, second.request.body)

    def test_metadata_is_copied(self):
        """The event does not alias the posted metadata."""
        metadata = {'applicantId': 'a-1'}
        user = domain.user_from_dict({'user_id': 'x',
                                      'app_metadata': metadata})
        metadata['applicantId'] = 'a-2'
        self.assertEqual(user.applicant_id, 'a-1')

    def test_mappings_required(self):
        """Users and requests cannot be built without their mappings."""
        with self.assertRaises(TypeError):
            domain.User(user_id='x')    # type: ignore
        with self.assertRaises(TypeError):
            domain.RequestContext(ip='10.1.2.3')    # type: ignore

    def test_non_object_fields(self):
        """Object-valued fields holding anything else are invalid."""
        with self.assertRaises(InvalidEvent):
            domain.user_from_dict({'user_id': 'x', 'app_metadata': [1]})
        with self.assertRaises(InvalidEvent):
            domain.request_from_dict({'query': 'a=b'})


class TestApplicantFromDict(TestCase):
    """Onfido applicant bodies become :class:`.Applicant`."""

    def test_applicant(self):
        """The id and creation time are read."""
        applicant = domain.applicant_from_dict({
            'id': 'a-1', 'created_at': '2024-05-01T12:00:00Z',
            'first_name': 'Jane'
        })
        self.assertEqual(applicant.applicant_id, 'a-1')
        self.assertEqual(applicant.first_name, 'Jane')
        self.assertEqual(applicant.created_at.month, 5)

    def test_no_id(self):
        """A body without an id cannot be an applicant."""
        with self.assertRaises(KeyError):
            domain.applicant_from_dict({'first_name': 'Jane'})
