"""Tests for :mod:`idv_actions.tokens`."""

from unittest import TestCase

import jwt

from idv_actions import tokens
from idv_actions.exceptions import ExpiredToken, InvalidToken, \
    TokenEncodingFailed, TokenValidationFailed

SECRET = 'a-session-token-secret-long-enough-for-hs256'


class TestEncodeDecode(TestCase):
    """Session tokens survive the round trip only when they should."""

    def setUp(self):
        self.payload = {
            'iss': 'https://login.example.com/',
            'aud': 'urn:idv:onfido',
            'sub': 'auth0|1234',
            'applicant_id': 'applicant-1'
        }

    def test_valid_with_same_secret(self):
        """A fresh token decodes with the secret that signed it."""
        token = tokens.encode(self.payload, SECRET)
        claims = tokens.decode(token, SECRET, audience='urn:idv:onfido',
                               issuer='https://login.example.com/',
                               subject='auth0|1234')
        self.assertEqual(claims['applicant_id'], 'applicant-1')
        self.assertEqual(claims['exp'] - claims['iat'], 300)

    def test_custom_expiry(self):
        """The expiry window is configurable."""
        token = tokens.encode(self.payload, SECRET, expires_in=60)
        claims = tokens.decode(token, SECRET, audience='urn:idv:onfido')
        self.assertEqual(claims['exp'] - claims['iat'], 60)

    def test_expired(self):
        """A token past its expiry fails validation."""
        token = tokens.encode(self.payload, SECRET, expires_in=-10)
        with self.assertRaises(ExpiredToken):
            tokens.decode(token, SECRET, audience='urn:idv:onfido')

    def test_different_secret(self):
        """A token signed with another secret fails validation."""
        token = tokens.encode(self.payload, 'some-other-secret-of-decent-len')
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET, audience='urn:idv:onfido')

    def test_failures_share_a_base_class(self):
        """Callers can catch every validation failure at once."""
        self.assertTrue(issubclass(ExpiredToken, TokenValidationFailed))
        self.assertTrue(issubclass(InvalidToken, TokenValidationFailed))

    def test_tampered(self):
        """Changing the payload invalidates the signature."""
        token = tokens.encode(self.payload, SECRET)
        forged = jwt.encode(
            dict(jwt.decode(token, options={'verify_signature': False}),
                 applicant_id='applicant-2'),
            'not-the-right-secret-at-all-nope', algorithm='HS256'
        )
        header, _, signature = token.split('.')
        _, body, _ = forged.split('.')
        with self.assertRaises(InvalidToken):
            tokens.decode('.'.join([header, body, signature]), SECRET,
                          audience='urn:idv:onfido')

    def test_wrong_audience(self):
        """The audience must match when it is checked."""
        token = tokens.encode(self.payload, SECRET)
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET, audience='urn:something:else')

    def test_wrong_issuer(self):
        """The issuer must match when it is checked."""
        token = tokens.encode(self.payload, SECRET)
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET, audience='urn:idv:onfido',
                          issuer='https://evil.example.com/')

    def test_wrong_subject(self):
        """A token issued for another user is rejected."""
        token = tokens.encode(self.payload, SECRET)
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET, audience='urn:idv:onfido',
                          subject='auth0|9999')

    def test_missing_or_malformed(self):
        """Absent and garbage tokens are invalid."""
        for bad in (None, '', 'definitelynotatoken'):
            with self.assertRaises(InvalidToken):
                tokens.decode(bad, SECRET)

    def test_missing_expiry(self):
        """Tokens without an expiry are not accepted."""
        token = jwt.encode({'sub': 'auth0|1234'}, SECRET, algorithm='HS256')
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET)

    def test_no_secret(self):
        """Tokens cannot be signed without a secret."""
        with self.assertRaises(TokenEncodingFailed):
            tokens.encode(self.payload, '')
