from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlmodel import Session, select

from ..core.errors import PasswordError, TokenError
from ..models.User import User, UserCreate, LoginRequest
from ..models.Token import TokenResponse
from .tokens import Claims, TokenAuthenticator

# Password hashing
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# auto_error=False so a missing header gets the same 401 body as a bad token
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestIdentity:
    """Authenticated caller, passed explicitly to handlers that need it."""
    user_id: int
    email: str
    username: str

    @classmethod
    def from_claims(cls, claims: Claims) -> "RequestIdentity":
        return cls(user_id=claims.user_id, email=claims.email, username=claims.username)


def hash_password(password: str) -> str:
    if not password:
        raise PasswordError("password cannot be empty")
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_authenticator(request: Request) -> TokenAuthenticator:
    return request.app.state.authenticator


def _issue_token_response(authenticator: TokenAuthenticator, user: User) -> TokenResponse:
    token, expires_at = authenticator.issue(user.id, user.email, user.username)
    return TokenResponse(token=token, expires_at=expires_at, user=user.to_response())


def register_user(session: Session, authenticator: TokenAuthenticator, data: UserCreate) -> TokenResponse:
    statement = select(User).where(User.email == data.email)
    if session.exec(statement).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    statement = select(User).where(User.username == data.username)
    if session.exec(statement).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    user = User(
        username=data.username,
        email=data.email,
        password=hash_password(data.password),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return _issue_token_response(authenticator, user)

def login_user(session: Session, authenticator: TokenAuthenticator, data: LoginRequest) -> TokenResponse:
    statement = select(User).where(User.email == data.email)
    user = session.exec(statement).first()
    # same answer for unknown email and wrong password
    if not user or not verify_password(data.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token_response(authenticator, user)


def get_current_identity(
    authenticator: Annotated[TokenAuthenticator, Depends(get_authenticator)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> RequestIdentity:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header is required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = authenticator.validate(credentials.credentials)
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return RequestIdentity.from_claims(claims)
