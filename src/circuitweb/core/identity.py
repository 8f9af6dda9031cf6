"""Identity provider client.

The rest of the application talks to the identity provider through the
`IdentityProvider` protocol, so the Firebase implementation can be swapped
for an in-memory double in tests.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Protocol, TypeVar

import firebase_admin
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

from src.circuitweb.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class IdentityProviderError(Exception):
    """Identity provider call failed."""


class InvalidTokenError(IdentityProviderError):
    """ID token is malformed, expired, revoked or otherwise rejected."""


class IdentityUserNotFoundError(IdentityProviderError):
    """No user with the given UID exists at the provider."""


@dataclass
class IdentityUser:
    """Provider-side view of a user account."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    phone_number: str | None = None
    email_verified: bool = False
    provider: str | None = None
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class IdentityProvider(Protocol):
    """Operations the API needs from the identity provider."""

    async def verify_id_token(self, token: str) -> str: ...

    async def get_user(self, uid: str) -> IdentityUser: ...

    async def create_user(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> IdentityUser: ...

    async def update_user(
        self,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
        photo_url: str | None = None,
        password: str | None = None,
        phone_number: str | None = None,
    ) -> IdentityUser: ...

    async def delete_user(self, uid: str) -> None: ...

    async def list_users(self) -> list[IdentityUser]: ...

    async def set_custom_user_claims(self, uid: str, claims: dict[str, Any]) -> None: ...


def _from_millis(value: int | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromtimestamp(value / 1000, UTC).replace(tzinfo=None)


def _to_identity_user(record: auth.UserRecord) -> IdentityUser:
    # First linked sign-in method (password, google.com, ...) rather than "firebase"
    provider = record.provider_data[0].provider_id if record.provider_data else record.provider_id
    metadata = record.user_metadata
    return IdentityUser(
        uid=record.uid,
        email=record.email,
        display_name=record.display_name,
        photo_url=record.photo_url,
        phone_number=record.phone_number,
        email_verified=record.email_verified,
        provider=provider,
        created_at=_from_millis(metadata.creation_timestamp if metadata else None),
        last_login_at=_from_millis(metadata.last_sign_in_timestamp if metadata else None),
    )


class FirebaseIdentityProvider:
    """Firebase Authentication backed identity provider.

    The Admin SDK is blocking, so every call runs in a worker thread. SDK
    errors are translated into IdentityProviderError subclasses.
    """

    def __init__(self, app: firebase_admin.App):
        self.app = app

    async def _call(self, func: Callable[[], T], uid: str | None = None) -> T:
        try:
            return await asyncio.to_thread(func)
        except auth.UserNotFoundError as e:
            raise IdentityUserNotFoundError(f"User {uid} not found") from e
        except (FirebaseError, ValueError) as e:
            raise IdentityProviderError(str(e)) from e

    async def verify_id_token(self, token: str) -> str:
        try:
            decoded = await asyncio.to_thread(auth.verify_id_token, token, self.app)
        except (ValueError, auth.InvalidIdTokenError, auth.CertificateFetchError) as e:
            raise InvalidTokenError(str(e)) from e
        return decoded["uid"]

    async def get_user(self, uid: str) -> IdentityUser:
        record = await self._call(lambda: auth.get_user(uid, app=self.app), uid)
        return _to_identity_user(record)

    async def create_user(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> IdentityUser:
        kwargs: dict[str, Any] = {"email": email, "password": password, "email_verified": False}
        if display_name:
            kwargs["display_name"] = display_name
        if photo_url:
            kwargs["photo_url"] = photo_url

        record = await self._call(lambda: auth.create_user(app=self.app, **kwargs))
        logger.info("Created identity user", uid=record.uid)
        return _to_identity_user(record)

    async def update_user(
        self,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
        photo_url: str | None = None,
        password: str | None = None,
        phone_number: str | None = None,
    ) -> IdentityUser:
        # Only non-empty values are sent; empty strings would clear provider fields
        candidates = {
            "email": email,
            "display_name": display_name,
            "photo_url": photo_url,
            "password": password,
            "phone_number": phone_number,
        }
        kwargs = {key: value for key, value in candidates.items() if value}

        record = await self._call(lambda: auth.update_user(uid, app=self.app, **kwargs), uid)
        logger.info("Updated identity user", uid=uid)
        return _to_identity_user(record)

    async def delete_user(self, uid: str) -> None:
        await self._call(lambda: auth.delete_user(uid, app=self.app), uid)
        logger.info("Deleted identity user", uid=uid)

    async def list_users(self) -> list[IdentityUser]:
        def _list_all() -> list[IdentityUser]:
            page = auth.list_users(app=self.app)
            return [_to_identity_user(record) for record in page.iterate_all()]

        return await self._call(_list_all)

    async def set_custom_user_claims(self, uid: str, claims: dict[str, Any]) -> None:
        await self._call(lambda: auth.set_custom_user_claims(uid, claims, app=self.app), uid)
        logger.info("Set custom claims", uid=uid, claim_keys=sorted(claims))
