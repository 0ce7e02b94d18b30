from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..audit.service import EventLogger, get_event_logger
from ..auth.service import RequestIdentity, get_current_identity
from ..core.database import get_session
from ..models.Comment import CommentCreate, CommentListResponse, CommentResponse
from .service import DEFAULT_LIMIT, create_comment, list_comments

router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"])

@router.get("", response_model=CommentListResponse)
def read_comments(
    post_id: int,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    """
    List comments on a post, oldest first.
    """
    return list_comments(session, post_id, limit, offset)

@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_new_comment(
    post_id: int,
    data: CommentCreate,
    identity: Annotated[RequestIdentity, Depends(get_current_identity)],
    event_logger: Annotated[EventLogger, Depends(get_event_logger)],
    session: Session = Depends(get_session),
):
    comment = create_comment(session, identity.user_id, post_id, data.content)
    event_logger.log_event(f"user {identity.user_id} created comment {comment.id}")
    return comment
