from datetime import datetime, timezone

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

# ==========================================
# SQLModel (Database Entity + Base Pydantic)
# ==========================================
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, nullable=False)
    email: str = Field(unique=True, index=True, nullable=False)
    password: str = Field(nullable=False)  # password hash, never returned
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_response(self) -> "UserResponse":
        return UserResponse(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
        )

# ==========================================
# Pydantic Models (DTOs)
# ==========================================

# Properties to receive via API on registration
class UserCreate(SQLModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)

# Properties to receive via API on login
class LoginRequest(SQLModel):
    email: EmailStr
    password: str = Field(min_length=1)

# Properties to return via API
class UserResponse(SQLModel):
    id: int
    username: str
    email: str
    created_at: datetime
