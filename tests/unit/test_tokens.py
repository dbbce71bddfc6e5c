import unittest
from datetime import datetime, timedelta, timezone

import jwt

from app.core.exceptions import Unauthorized
from app.user.tokens import SessionIssuer

SECRET = "unit-test-secret-0123456789abcdef-0123"


def issued_minutes_ago(minutes):
    issued_at = datetime.now(timezone.utc) - timedelta(minutes=minutes)
    return SessionIssuer(SECRET, clock=lambda: issued_at)


class SessionIssuerTests(unittest.TestCase):
    def setUp(self):
        self.issuer = SessionIssuer(SECRET)

    def test_verify_returns_issued_user_id(self):
        token = self.issuer.issue("user-1")
        self.assertEqual(self.issuer.verify(token), "user-1")

    def test_token_expires_one_hour_after_issue(self):
        claims = jwt.decode(self.issuer.issue("user-1"), SECRET, algorithms=["HS256"])
        self.assertEqual(claims["exp"] - claims["iat"], 3600)

    def test_token_still_valid_just_before_expiry(self):
        token = issued_minutes_ago(59).issue("user-1")
        self.assertEqual(self.issuer.verify(token), "user-1")

    def test_token_rejected_after_an_hour(self):
        """Tokens are accepted for one hour from issuance and rejected after"""
        token = issued_minutes_ago(61).issue("user-1")
        with self.assertRaises(Unauthorized) as ctx:
            self.issuer.verify(token)
        self.assertEqual(ctx.exception.detail, "Token has expired")

    def test_token_signed_with_other_secret_rejected(self):
        token = SessionIssuer("another-secret-0123456789abcdef-0123456").issue("user-1")
        with self.assertRaises(Unauthorized):
            self.issuer.verify(token)

    def test_malformed_and_missing_tokens_rejected(self):
        for token in (None, "", "not-a-jwt", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(Unauthorized):
                    self.issuer.verify(token)

    def test_token_without_subject_rejected(self):
        exp = datetime.now(timezone.utc) + timedelta(minutes=5)
        token = jwt.encode({"exp": exp}, SECRET, algorithm="HS256")
        with self.assertRaises(Unauthorized):
            self.issuer.verify(token)


if __name__ == '__main__':
    unittest.main()
