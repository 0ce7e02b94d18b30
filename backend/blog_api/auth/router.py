from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..audit.service import EventLogger, get_event_logger
from ..core.database import get_session
from ..models.Token import TokenResponse
from ..models.User import LoginRequest, UserCreate
from .service import get_authenticator, login_user, register_user
from .tokens import TokenAuthenticator

router = APIRouter(tags=["auth"])

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: UserCreate,
    authenticator: Annotated[TokenAuthenticator, Depends(get_authenticator)],
    event_logger: Annotated[EventLogger, Depends(get_event_logger)],
    session: Session = Depends(get_session),
):
    """
    Register a new user and return an access token.
    """
    response = register_user(session, authenticator, data)
    event_logger.log_event(f"user {response.user.id} registered")
    return response

@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    authenticator: Annotated[TokenAuthenticator, Depends(get_authenticator)],
    session: Session = Depends(get_session),
):
    """
    Login with email and password to get an access token.
    """
    return login_user(session, authenticator, data)
