"""Authentication service - identity-provider tokens and local user records."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.circuitweb.core.exceptions import Unauthenticated
from src.circuitweb.core.identity import (
    IdentityProvider,
    IdentityProviderError,
    IdentityUser,
    IdentityUserNotFoundError,
)
from src.circuitweb.core.logging import get_logger
from src.circuitweb.models import User
from src.circuitweb.models.base import utc_now
from src.circuitweb.repositories import UserRepository
from src.circuitweb.schemas.user import UserSummary

logger = get_logger(__name__)


class AuthService:
    """Authentication service.

    Verifies identity-provider ID tokens, mirrors provider accounts into the
    local users table, and passes user management calls through to the provider.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        identity: IdentityProvider,
    ):
        self.user_repo = user_repo
        self.session = session
        self.identity = identity

    # --- Tokens ---

    async def verify_token(self, token: str | None) -> str:
        """Verify an ID token and return the caller's UID.

        Raises:
            Unauthenticated: If the token is missing, blank or rejected.
        """
        if not token or not token.strip():
            raise Unauthenticated("Invalid token")
        try:
            return await self.identity.verify_id_token(token.strip())
        except IdentityProviderError as e:
            logger.warning("Failed to verify ID token", error=str(e))
            raise Unauthenticated("Invalid token") from e

    # --- Local users ---

    async def get_user_by_uid(self, uid: str) -> User | None:
        return await self.user_repo.get_by_firebase_uid(uid)

    async def create_local_user(
        self,
        uid: str,
        email: str,
        display_name: str | None = None,
        photo_url: str | None = None,
        provider: str | None = None,
        signed_in: bool = False,
    ) -> User:
        """Persist a local row for a provider account.

        Args:
            signed_in: Set when the row is created by the user signing in,
                       so last_login_at is populated.
        """
        user = User(
            firebase_uid=uid,
            email=email,
            display_name=display_name,
            photo_url=photo_url,
            provider=provider,
            last_login_at=utc_now() if signed_in else None,
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Created local user", uid=uid, provider=provider)
        return user

    async def record_last_login(self, user: User) -> User:
        """Touch last_login_at only; updated_at is not modified."""
        user.last_login_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except Exception:
            await self.session.rollback()
            raise
        return user

    async def get_or_create_local_user(
        self,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
        provider: str | None = None,
    ) -> tuple[User, bool]:
        """Create the local row on first sign-in, otherwise record the login.

        On creation the photo comes from the provider account, the email falls
        back to the provider's, and the provider defaults to "email". A repeat
        sign-in leaves every profile field as stored.

        Returns:
            Tuple of (user, created)
        """
        existing = await self.user_repo.get_by_firebase_uid(uid)
        if existing is not None:
            return await self.record_last_login(existing), False

        identity_user = await self.get_identity_user(uid)
        user = await self.create_local_user(
            uid,
            email=email or (identity_user.email if identity_user else None) or "",
            display_name=display_name,
            photo_url=identity_user.photo_url if identity_user else None,
            provider=provider or "email",
            signed_in=True,
        )
        return user, True

    async def update_local_profile(
        self,
        user: User,
        display_name: str | None = None,
        photo_url: str | None = None,
        phone_number: str | None = None,
    ) -> User:
        """Update profile fields that were supplied; firebase_uid never changes."""
        if display_name is not None:
            user.display_name = display_name
        if photo_url is not None:
            user.photo_url = photo_url
        if phone_number is not None:
            user.phone_number = phone_number
        user.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except Exception:
            await self.session.rollback()
            raise
        return user

    async def delete_local_user(self, uid: str) -> bool:
        """Delete the local row for a UID. Returns False if none existed."""
        user = await self.user_repo.get_by_firebase_uid(uid)
        if user is None:
            return False
        try:
            await self.user_repo.delete(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return True

    async def list_local_users(self) -> list[User]:
        return await self.user_repo.list_all()

    # --- Identity provider passthroughs ---

    async def get_identity_user(self, uid: str) -> IdentityUser | None:
        """Look up a provider account; None if unknown or the lookup failed."""
        try:
            return await self.identity.get_user(uid)
        except IdentityUserNotFoundError:
            return None
        except Exception as e:
            logger.error("Failed to get identity user", uid=uid, error=str(e))
            return None

    async def create_identity_user(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> IdentityUser:
        try:
            return await self.identity.create_user(email, password, display_name, photo_url)
        except Exception as e:
            logger.error("Failed to create identity user", error=str(e))
            raise

    async def update_identity_user(
        self,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
        photo_url: str | None = None,
        password: str | None = None,
        phone_number: str | None = None,
    ) -> IdentityUser:
        try:
            return await self.identity.update_user(
                uid,
                email=email,
                display_name=display_name,
                photo_url=photo_url,
                password=password,
                phone_number=phone_number,
            )
        except Exception as e:
            logger.error("Failed to update identity user", uid=uid, error=str(e))
            raise

    async def delete_identity_user(self, uid: str) -> None:
        try:
            await self.identity.delete_user(uid)
        except Exception as e:
            logger.error("Failed to delete identity user", uid=uid, error=str(e))
            raise

    async def set_custom_claims(self, uid: str, claims: dict[str, Any]) -> None:
        try:
            await self.identity.set_custom_user_claims(uid, claims)
        except Exception as e:
            logger.error("Failed to set custom claims", uid=uid, error=str(e))
            raise

    async def list_identity_users(self) -> list[IdentityUser]:
        return await self.identity.list_users()

    async def list_all_users(self) -> list[UserSummary]:
        """List users from the identity provider, falling back to the database.

        The provider is tried first; an empty result or any provider error
        falls back to the local users table. The two sources are not reconciled.
        """
        try:
            logger.info("Fetching users from identity provider")
            identity_users = await self.list_identity_users()
            if identity_users:
                return [
                    UserSummary(
                        uid=u.uid,
                        email=u.email,
                        display_name=u.display_name,
                        photo_url=u.photo_url,
                        phone_number=u.phone_number,
                        provider=u.provider,
                        created_at=u.created_at,
                        last_login_at=u.last_login_at,
                    )
                    for u in identity_users
                ]
            logger.warning("No users returned from identity provider, falling back to database")
        except Exception as e:
            logger.error(
                "Identity provider user listing failed, falling back to database",
                error=str(e),
            )

        return [
            UserSummary(
                uid=u.firebase_uid,
                email=u.email,
                display_name=u.display_name,
                photo_url=u.photo_url,
                phone_number=u.phone_number,
                provider=u.provider,
                created_at=u.created_at,
                updated_at=u.updated_at,
                last_login_at=u.last_login_at,
            )
            for u in await self.list_local_users()
        ]
