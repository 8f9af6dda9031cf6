"""Authentication and account management endpoints.

Tokens are ID tokens issued by the identity provider. Account management
calls are passed through to the provider and mirrored into the local users
table where a local row exists.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from src.circuitweb.api.dependencies import AuthServiceDep
from src.circuitweb.core.exceptions import NotFound, Unexpected, ValidationError
from src.circuitweb.core.identity import IdentityProviderError
from src.circuitweb.core.logging import get_logger
from src.circuitweb.schemas.auth import (
    AccountRead,
    AccountResponse,
    CreateUserRequest,
    SetCustomClaimsRequest,
    SignUpRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
    VerifyTokenRequest,
)
from src.circuitweb.schemas.common import Envelope

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

UidQuery = Annotated[str | None, Query()]


@router.post("/verify", response_model=AccountResponse, responses={401: {}, 404: {}})
async def verify_token(request: VerifyTokenRequest, service: AuthServiceDep) -> AccountResponse:
    """Verify an ID token and return the provider account behind it."""
    uid = await service.verify_token(request.id_token or request.token)

    identity_user = await service.get_identity_user(uid)
    if identity_user is None:
        raise NotFound("User not found")

    local_user = await service.get_user_by_uid(uid)
    return AccountResponse(
        message="Token verified successfully",
        user=AccountRead(
            id=local_user.id if local_user else None,
            uid=identity_user.uid,
            email=identity_user.email,
            email_verified=identity_user.email_verified,
            display_name=identity_user.display_name,
        ),
    )


@router.post("/signup", response_model=AccountResponse, responses={401: {}})
async def signup(request: SignUpRequest, service: AuthServiceDep) -> AccountResponse:
    """Register the caller locally on first sign-in; later calls record the login."""
    uid = await service.verify_token(request.id_token)

    user, created = await service.get_or_create_local_user(
        uid, request.email, request.display_name, request.provider
    )

    return AccountResponse(
        message="User registered successfully" if created else "User login successful",
        user=AccountRead(
            id=user.id,
            uid=user.firebase_uid,
            email=user.email,
            display_name=user.display_name,
        ),
    )


@router.post("/create-user", response_model=AccountResponse, responses={400: {}, 500: {}})
async def create_user(request: CreateUserRequest, service: AuthServiceDep) -> AccountResponse:
    """Create an email/password account at the provider and a matching local row."""
    if not request.email:
        raise ValidationError("Email is required")
    if not request.password:
        raise ValidationError("Password is required")

    try:
        identity_user = await service.create_identity_user(
            request.email, request.password, request.display_name, request.photo_url
        )
    except IdentityProviderError as e:
        raise Unexpected(str(e)) from e

    user = await service.create_local_user(
        identity_user.uid,
        email=identity_user.email or request.email,
        display_name=identity_user.display_name,
        photo_url=identity_user.photo_url,
        provider="password",
    )
    return AccountResponse(
        message="User created successfully",
        user=AccountRead(
            id=user.id,
            uid=identity_user.uid,
            email=identity_user.email,
            display_name=identity_user.display_name,
        ),
    )


@router.get("/get-user", response_model=AccountResponse, responses={400: {}, 404: {}})
async def get_user(service: AuthServiceDep, uid: UidQuery = None) -> AccountResponse:
    if not uid:
        raise ValidationError("User UID is required")

    identity_user = await service.get_identity_user(uid)
    if identity_user is None:
        raise NotFound("User not found")

    return AccountResponse(
        message="User found",
        user=AccountRead(
            uid=identity_user.uid,
            email=identity_user.email,
            display_name=identity_user.display_name,
            photo_url=identity_user.photo_url,
        ),
    )


@router.put("/update-user", response_model=AccountResponse, responses={400: {}, 500: {}})
async def update_user(request: UpdateUserRequest, service: AuthServiceDep) -> AccountResponse:
    """Update a provider account. The local row is left untouched."""
    if not request.uid:
        raise ValidationError("User UID is required")

    try:
        identity_user = await service.update_identity_user(
            request.uid,
            email=request.email,
            display_name=request.display_name,
            photo_url=request.photo_url,
            password=request.password,
            phone_number=request.phone_number,
        )
    except IdentityProviderError as e:
        raise Unexpected(str(e)) from e

    return AccountResponse(
        message="User updated successfully",
        user=AccountRead(
            uid=identity_user.uid,
            display_name=identity_user.display_name,
            photo_url=identity_user.photo_url,
            phone_number=identity_user.phone_number,
        ),
    )


@router.put(
    "/update-profile",
    response_model=AccountResponse,
    responses={400: {}, 401: {}, 500: {}},
)
async def update_profile(
    request: UpdateProfileRequest, service: AuthServiceDep
) -> AccountResponse:
    """Update the token holder's own profile at the provider and in the local row.

    Email and password cannot be changed through this endpoint.
    """
    if not request.id_token:
        raise ValidationError("ID token is required")
    uid = await service.verify_token(request.id_token)

    try:
        identity_user = await service.update_identity_user(
            uid,
            display_name=request.display_name,
            photo_url=request.photo_url,
            phone_number=request.phone_number,
        )
    except IdentityProviderError as e:
        raise Unexpected(str(e)) from e

    local_user = await service.get_user_by_uid(uid)
    if local_user is not None:
        await service.update_local_profile(
            local_user,
            display_name=request.display_name,
            photo_url=request.photo_url,
            phone_number=request.phone_number,
        )

    return AccountResponse(
        message="Profile updated successfully",
        user=AccountRead(
            uid=identity_user.uid,
            display_name=identity_user.display_name,
            photo_url=identity_user.photo_url,
            phone_number=identity_user.phone_number,
        ),
    )


@router.delete("/delete-user", response_model=Envelope, responses={400: {}, 500: {}})
async def delete_user(service: AuthServiceDep, uid: UidQuery = None) -> Envelope:
    """Delete the provider account, then the local row if there is one."""
    if not uid:
        raise ValidationError("User UID is required")

    try:
        await service.delete_identity_user(uid)
    except IdentityProviderError as e:
        raise Unexpected(str(e)) from e

    await service.delete_local_user(uid)
    return Envelope(message="User deleted successfully")


@router.post("/set-custom-claims", response_model=Envelope, responses={400: {}, 500: {}})
async def set_custom_claims(request: SetCustomClaimsRequest, service: AuthServiceDep) -> Envelope:
    if not request.uid:
        raise ValidationError("User UID is required")
    if request.custom_claims is None:
        raise ValidationError("Custom claims are required")

    try:
        await service.set_custom_claims(request.uid, request.custom_claims)
    except IdentityProviderError as e:
        raise Unexpected(str(e)) from e

    return Envelope(message="Custom claims set successfully")
