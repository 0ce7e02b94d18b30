from datetime import datetime

from sqlmodel import Field, SQLModel

class SchemaMigration(SQLModel, table=True):
    """Completion record: one row per applied migration unit."""
    __tablename__ = "schema_migrations"

    version: str = Field(primary_key=True, max_length=255, description="Migration file name, e.g. 001_create_users.sql")
    applied_at: datetime = Field(nullable=False)
