from datetime import datetime

from sqlmodel import SQLModel

from .User import UserResponse

class TokenResponse(SQLModel):
    token: str # JWT Token
    expires_at: datetime
    user: UserResponse
