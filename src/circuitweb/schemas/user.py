"""User schemas - local rows and identity-provider accounts share these shapes."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.circuitweb.schemas.common import Envelope


class UserSummary(BaseModel):
    """Source-neutral user listing entry (provider or database)."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str
    email: str | None = None
    display_name: str | None = Field(default=None, serialization_alias="displayName")
    photo_url: str | None = Field(default=None, serialization_alias="photoURL")
    phone_number: str | None = Field(default=None, serialization_alias="phoneNumber")
    provider: str | None = None
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")
    last_login_at: datetime | None = Field(default=None, serialization_alias="lastLoginAt")


class UserListResponse(Envelope):
    users: list[UserSummary]
