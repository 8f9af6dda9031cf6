"""Auth request and response schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.circuitweb.schemas.common import Envelope, RequestModel


class VerifyTokenRequest(RequestModel):
    id_token: str | None = None
    # Older clients send the token as "token"
    token: str | None = None


class SignUpRequest(RequestModel):
    id_token: str | None = None
    email: str | None = None
    display_name: str | None = None
    provider: str | None = None


class CreateUserRequest(RequestModel):
    email: str | None = None
    password: str | None = None
    display_name: str | None = None
    photo_url: str | None = None


class UpdateUserRequest(RequestModel):
    uid: str | None = None
    email: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    password: str | None = None
    phone_number: str | None = None


class UpdateProfileRequest(RequestModel):
    id_token: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    phone_number: str | None = None


class SetCustomClaimsRequest(RequestModel):
    uid: str | None = None
    custom_claims: dict[str, Any] | None = None


class AccountRead(BaseModel):
    """User block returned by the auth endpoints (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    uid: str
    email: str | None = None
    email_verified: bool | None = Field(default=None, serialization_alias="emailVerified")
    display_name: str | None = Field(default=None, serialization_alias="displayName")
    photo_url: str | None = Field(default=None, serialization_alias="photoURL")
    phone_number: str | None = Field(default=None, serialization_alias="phoneNumber")


class AccountResponse(Envelope):
    user: AccountRead
