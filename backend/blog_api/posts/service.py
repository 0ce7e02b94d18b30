from fastapi import HTTPException, status
from sqlalchemy import func
from sqlmodel import Session, select

from ..models.Post import AuthorPostListResponse, Post, PostCreate, PostListResponse, PostResponse

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

def normalize_page(limit: int, offset: int, default_limit: int = DEFAULT_LIMIT) -> tuple[int, int]:
    """Clamp pagination: non-positive limit -> default, cap at MAX_LIMIT, offset >= 0."""
    if limit <= 0:
        limit = default_limit
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT
    if offset < 0:
        offset = 0
    return limit, offset

def _to_responses(posts: list[Post]) -> list[PostResponse]:
    return [PostResponse.model_validate(post, from_attributes=True) for post in posts]

def create_post(session: Session, author_id: int, data: PostCreate) -> Post:
    post = Post(title=data.title, content=data.content, author_id=author_id)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post

def get_post(session: Session, post_id: int) -> Post:
    post = session.get(Post, post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post

def post_exists(session: Session, post_id: int) -> bool:
    return session.get(Post, post_id) is not None

def list_posts(session: Session, limit: int, offset: int) -> PostListResponse:
    limit, offset = normalize_page(limit, offset)
    statement = (
        select(Post)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(limit)
    )
    posts = session.exec(statement).all()
    total = session.exec(select(func.count()).select_from(Post)).one()
    return PostListResponse(posts=_to_responses(posts), total=total, limit=limit, offset=offset)

def list_posts_by_author(session: Session, author_id: int, limit: int, offset: int) -> AuthorPostListResponse:
    limit, offset = normalize_page(limit, offset)
    statement = (
        select(Post)
        .where(Post.author_id == author_id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(limit)
    )
    posts = session.exec(statement).all()
    total = session.exec(
        select(func.count()).select_from(Post).where(Post.author_id == author_id)
    ).one()
    return AuthorPostListResponse(
        posts=_to_responses(posts), total=total, limit=limit, offset=offset, author_id=author_id
    )
