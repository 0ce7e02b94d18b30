class TokenError(Exception):
    """Base class for identity token rejections."""


class InvalidTokenError(TokenError):
    """Token is malformed, carries a bad signature or unexpected claims."""


class ExpiredTokenError(TokenError):
    """Token signature is valid but its expiry time has passed."""


class PasswordError(ValueError):
    """Password cannot be hashed (empty input)."""


class FatalMigrationError(Exception):
    """
    A migration unit could not be applied. Startup must not continue.
    """

    def __init__(self, version: str, message: str):
        super().__init__(f"migration {version} failed: {message}")
        self.version = version
