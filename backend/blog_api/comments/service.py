from fastapi import HTTPException, status
from sqlalchemy import func
from sqlmodel import Session, select

from ..models.Comment import MAX_COMMENT_LENGTH, Comment, CommentListResponse, CommentResponse
from ..posts.service import normalize_page, post_exists

DEFAULT_LIMIT = 20

def _check_post(session: Session, post_id: int) -> None:
    if post_id <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid post ID")
    if not post_exists(session, post_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

def create_comment(session: Session, author_id: int, post_id: int, content: str) -> Comment:
    _check_post(session, post_id)

    content = content.strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Content is required")
    if len(content) > MAX_COMMENT_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Content exceeds maximum length of {MAX_COMMENT_LENGTH} characters",
        )

    comment = Comment(post_id=post_id, author_id=author_id, content=content)
    session.add(comment)
    session.commit()
    session.refresh(comment)
    return comment

def list_comments(session: Session, post_id: int, limit: int, offset: int) -> CommentListResponse:
    _check_post(session, post_id)
    limit, offset = normalize_page(limit, offset, default_limit=DEFAULT_LIMIT)

    statement = (
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .offset(offset)
        .limit(limit)
    )
    comments = session.exec(statement).all()
    total = session.exec(
        select(func.count()).select_from(Comment).where(Comment.post_id == post_id)
    ).one()
    return CommentListResponse(
        comments=[CommentResponse.model_validate(c, from_attributes=True) for c in comments],
        total=total, limit=limit, offset=offset, post_id=post_id
    )
