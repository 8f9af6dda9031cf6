"""Local user record, keyed to the identity provider by firebase_uid."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.circuitweb.models.base import utc_now


class User(SQLModel, table=True):
    """User registered through the identity provider."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    firebase_uid: str = Field(max_length=128, unique=True, index=True)
    email: str = Field(max_length=255, index=True)
    display_name: str | None = Field(default=None, max_length=255)
    photo_url: str | None = Field(default=None)
    phone_number: str | None = Field(default=None, max_length=32)
    provider: str | None = Field(default=None, max_length=50)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default=None)
    last_login_at: datetime | None = Field(default=None)
