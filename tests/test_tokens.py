import base64
import json
import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from blog_api.auth.tokens import TokenAuthenticator
from blog_api.core.errors import ExpiredTokenError, InvalidTokenError, TokenError

SECRET = "test-secret"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def _b64(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).decode().rstrip("=")


def _b64_decode(segment: str) -> dict:
    padded = segment + "=" * (-len(segment) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


class TestTokenAuthenticator(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock(datetime(2024, 5, 1, 12, 0, 0, 250000, tzinfo=timezone.utc))
        self.auth = TokenAuthenticator(SECRET, ttl=timedelta(hours=24), clock=self.clock)

    def test_issue_then_validate_returns_input_claims(self):
        token, expires_at = self.auth.issue(7, "ann@example.com", "ann")

        claims = self.auth.validate(token)
        self.assertEqual(claims.user_id, 7)
        self.assertEqual(claims.email, "ann@example.com")
        self.assertEqual(claims.username, "ann")
        self.assertEqual(claims.issuer, "blog-api")
        self.assertEqual(claims.expires_at, expires_at)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(hours=24))

    def test_zero_ttl_token_expires_after_any_delay(self):
        auth = TokenAuthenticator(SECRET, ttl=timedelta(0), clock=self.clock)
        token, _ = auth.issue(1, "a@example.com", "alice")

        self.clock.advance(seconds=1)
        with self.assertRaises(ExpiredTokenError):
            auth.validate(token)

    def test_expiry_boundary_is_exclusive(self):
        token, expires_at = self.auth.issue(1, "a@example.com", "alice")

        self.clock.now = expires_at - timedelta(microseconds=1)
        self.assertEqual(self.auth.validate(token).user_id, 1)

        self.clock.now = expires_at
        with self.assertRaises(ExpiredTokenError):
            self.auth.validate(token)

    def test_expired_token_is_still_a_token_error(self):
        token, _ = self.auth.issue(1, "a@example.com", "alice")
        self.clock.advance(days=2)
        with self.assertRaises(TokenError):
            self.auth.validate(token)

    def test_modified_payload_is_rejected(self):
        token, _ = self.auth.issue(1, "a@example.com", "alice")
        header, payload, signature = token.split(".")

        claims = _b64_decode(payload)
        claims["user_id"] = 2
        forged = ".".join([header, _b64(claims), signature])
        with self.assertRaises(InvalidTokenError):
            self.auth.validate(forged)

        first = "A" if payload[0] != "A" else "B"
        mutated = ".".join([header, first + payload[1:], signature])
        with self.assertRaises(InvalidTokenError):
            self.auth.validate(mutated)

    def test_wrong_secret_is_rejected(self):
        other = TokenAuthenticator("another-secret", ttl=timedelta(hours=1), clock=self.clock)
        token, _ = other.issue(1, "a@example.com", "alice")
        with self.assertRaises(InvalidTokenError):
            self.auth.validate(token)

    def test_malformed_token_is_rejected(self):
        for token in ["", "not-a-token", "a.b.c", "header.payload"]:
            with self.subTest(token=token):
                with self.assertRaises(InvalidTokenError):
                    self.auth.validate(token)

    def test_missing_claims_are_rejected(self):
        now = int(self.clock.now.timestamp())
        token = jwt.encode(
            {"email": "a@example.com", "iat": now, "exp": now + 60, "iss": "blog-api"},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.auth.validate(token)

    def test_foreign_issuer_is_rejected(self):
        other = TokenAuthenticator(SECRET, ttl=timedelta(hours=1), issuer="someone-else", clock=self.clock)
        token, _ = other.issue(1, "a@example.com", "alice")
        with self.assertRaises(InvalidTokenError):
            self.auth.validate(token)

    def test_signature_check_does_not_bypass_expiry(self):
        token, _ = self.auth.issue(1, "a@example.com", "alice")
        self.clock.advance(hours=25)
        with self.assertRaises(ExpiredTokenError):
            self.auth.validate(token)

    def test_empty_secret_is_refused(self):
        with self.assertRaises(ValueError):
            TokenAuthenticator("", ttl=timedelta(hours=1))


if __name__ == "__main__":
    unittest.main()
