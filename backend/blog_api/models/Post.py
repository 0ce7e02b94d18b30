from datetime import datetime, timezone

from sqlmodel import Field, SQLModel

class Post(SQLModel, table=True):
    __tablename__ = "posts"

    id: int | None = Field(default=None, primary_key=True)
    title: str
    content: str
    author_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class PostCreate(SQLModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)

class PostResponse(SQLModel):
    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime

class PostListResponse(SQLModel):
    posts: list[PostResponse]
    total: int
    limit: int
    offset: int

class AuthorPostListResponse(PostListResponse):
    author_id: int
