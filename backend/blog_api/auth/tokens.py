from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from ..core.errors import ExpiredTokenError, InvalidTokenError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Claims:
    """Decoded identity token payload."""
    user_id: int
    email: str
    username: str
    issued_at: datetime
    expires_at: datetime
    issuer: str


class TokenAuthenticator:
    """
    Issues and validates HMAC-signed, time-bound identity tokens (JWT).

    Stateless: there is no revocation list, expiry is the only way a token
    stops being valid.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        algorithm: str = "HS256",
        issuer: str = "blog-api",
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("Token signing secret must be provided.")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._issuer = issuer
        self._clock = clock

    def issue(self, user_id: int, email: str, username: str) -> tuple[str, datetime]:
        # JWT time claims are whole seconds
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        to_encode = {
            "user_id": user_id,
            "email": email,
            "username": username,
            "iat": int(issued_at.timestamp()),
            "nbf": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self._issuer,
            "sub": "user",
        }
        token = jwt.encode(to_encode, self._secret, algorithm=self._algorithm)
        return token, expires_at

    def validate(self, token: str) -> Claims:
        """
        Verify the signature, then check expiry against the current time.

        Raises InvalidTokenError for a malformed token, a bad signature or
        missing claims, and ExpiredTokenError when now >= expires_at.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                # expiry is checked below with our own clock
                options={"verify_exp": False, "verify_nbf": False},
            )
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        try:
            claims = Claims(
                user_id=int(payload["user_id"]),
                email=str(payload["email"]),
                username=str(payload["username"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
                issuer=str(payload["iss"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError(f"malformed claims: {exc}") from exc

        if self._clock() >= claims.expires_at:
            raise ExpiredTokenError("token expired")
        return claims
