from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..audit.service import EventLogger, get_event_logger
from ..auth.service import RequestIdentity, get_current_identity
from ..core.database import get_session
from ..models.Post import PostCreate, PostListResponse, PostResponse
from .service import create_post, get_post, list_posts

router = APIRouter(prefix="/posts", tags=["posts"])

@router.get("", response_model=PostListResponse)
def read_posts(
    limit: int = 10,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    """
    List posts, newest first.
    """
    return list_posts(session, limit, offset)

@router.get("/{post_id}", response_model=PostResponse)
def read_post(
    post_id: int,
    session: Session = Depends(get_session),
):
    return get_post(session, post_id)

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_new_post(
    data: PostCreate,
    identity: Annotated[RequestIdentity, Depends(get_current_identity)],
    event_logger: Annotated[EventLogger, Depends(get_event_logger)],
    session: Session = Depends(get_session),
):
    """
    Create a post as the authenticated user.
    """
    post = create_post(session, identity.user_id, data)
    event_logger.log_event(f"user {identity.user_id} created post {post.id}")
    return post
