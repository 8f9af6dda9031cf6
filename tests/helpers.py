"""In-memory stand-ins for the external providers, plus small request helpers."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from src.circuitweb.core.identity import (
    IdentityProviderError,
    IdentityUser,
    IdentityUserNotFoundError,
    InvalidTokenError,
)
from src.circuitweb.core.storage import StorageError, StoredFile
from src.circuitweb.models.base import utc_now

OWNER_UID = "owner-uid"
OTHER_UID = "intruder-uid"


def caller_headers(uid: str) -> dict[str, str]:
    """Headers identifying the caller the way the web client does."""
    return {"X-User-ID": uid}


@dataclass
class FakeIdentityProvider:
    """Identity provider double backed by dictionaries.

    `tokens` maps ID tokens to UIDs. Set `fail_with` to make every call
    except token verification raise an IdentityProviderError.
    """

    users: dict[str, IdentityUser] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    claims: dict[str, dict[str, Any]] = field(default_factory=dict)
    fail_with: str | None = None

    def add_user(self, uid: str, token: str | None = None, **attrs: Any) -> IdentityUser:
        attrs.setdefault("email", f"{uid}@example.com")
        attrs.setdefault("created_at", utc_now())
        user = IdentityUser(uid=uid, **attrs)
        self.users[uid] = user
        if token:
            self.tokens[token] = uid
        return user

    def _check(self) -> None:
        if self.fail_with:
            raise IdentityProviderError(self.fail_with)

    def _get(self, uid: str) -> IdentityUser:
        if uid not in self.users:
            raise IdentityUserNotFoundError(f"User {uid} not found")
        return self.users[uid]

    async def verify_id_token(self, token: str) -> str:
        if token not in self.tokens:
            raise InvalidTokenError("Token rejected")
        return self.tokens[token]

    async def get_user(self, uid: str) -> IdentityUser:
        self._check()
        return self._get(uid)

    async def create_user(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> IdentityUser:
        self._check()
        if any(u.email == email for u in self.users.values()):
            raise IdentityProviderError(f"Email {email} already exists")
        uid = f"uid-{len(self.users) + 1}"
        return self.add_user(
            uid,
            email=email,
            display_name=display_name,
            photo_url=photo_url,
            provider="password",
        )

    async def update_user(
        self,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
        photo_url: str | None = None,
        password: str | None = None,
        phone_number: str | None = None,
    ) -> IdentityUser:
        self._check()
        changes = {
            "email": email,
            "display_name": display_name,
            "photo_url": photo_url,
            "phone_number": phone_number,
        }
        user = replace(self._get(uid), **{k: v for k, v in changes.items() if v})
        self.users[uid] = user
        return user

    async def delete_user(self, uid: str) -> None:
        self._check()
        self._get(uid)
        del self.users[uid]

    async def list_users(self) -> list[IdentityUser]:
        self._check()
        return list(self.users.values())

    async def set_custom_user_claims(self, uid: str, claims: dict[str, Any]) -> None:
        self._check()
        self._get(uid)
        self.claims[uid] = claims


@dataclass
class InMemoryStorageBackend:
    """Storage backend that keeps objects in a dictionary."""

    base_url: str = "https://files.test"
    objects: dict[str, tuple[bytes, str | None, datetime]] = field(default_factory=dict)
    fail_with: str | None = None

    async def upload(self, path: str, content: bytes, content_type: str | None = None) -> str:
        if self.fail_with:
            raise StorageError(self.fail_with)
        self.objects[path] = (content, content_type, utc_now())
        return f"{self.base_url}/{path}"

    async def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    async def delete(self, path: str) -> bool:
        return self.objects.pop(path, None) is not None

    async def list_objects(self, prefix: str | None = None) -> list[StoredFile]:
        return [
            StoredFile(
                name=path.rsplit("/", 1)[-1],
                path=path,
                size=len(content),
                content_type=content_type or "application/octet-stream",
                url=f"{self.base_url}/{path}",
                created_at=created_at,
            )
            for path, (content, content_type, created_at) in sorted(self.objects.items())
            if prefix is None or path.startswith(prefix)
        ]
