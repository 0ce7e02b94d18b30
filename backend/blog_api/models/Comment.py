from datetime import datetime, timezone

from sqlmodel import Field, SQLModel

MAX_COMMENT_LENGTH = 1000

class Comment(SQLModel, table=True):
    __tablename__ = "comments"

    id: int | None = Field(default=None, primary_key=True)
    content: str
    post_id: int = Field(foreign_key="posts.id", index=True)
    author_id: int = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

# Length rules are applied after trimming, in the service
class CommentCreate(SQLModel):
    content: str

class CommentResponse(SQLModel):
    id: int
    content: str
    post_id: int
    author_id: int
    created_at: datetime
    updated_at: datetime

class CommentListResponse(SQLModel):
    comments: list[CommentResponse]
    total: int
    limit: int
    offset: int
    post_id: int
