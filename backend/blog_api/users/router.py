from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ..auth.service import RequestIdentity, get_current_identity
from ..core.database import get_session
from ..models.Post import AuthorPostListResponse
from ..models.User import UserResponse
from ..posts.service import list_posts_by_author
from .service import get_user

router = APIRouter(tags=["users"])

@router.get("/profile", response_model=UserResponse)
def get_profile(
    identity: Annotated[RequestIdentity, Depends(get_current_identity)],
    session: Session = Depends(get_session),
):
    """
    Get the profile of the authenticated user.
    """
    return get_user(session, identity.user_id).to_response()

@router.get("/users/{author_id}/posts", response_model=AuthorPostListResponse)
def read_author_posts(
    author_id: int,
    limit: int = 10,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    """
    List posts written by one author, newest first.
    """
    return list_posts_by_author(session, author_id, limit, offset)
