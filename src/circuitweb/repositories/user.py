"""Repository for User entity."""

from sqlmodel import select

from src.circuitweb.models import User
from src.circuitweb.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for locally persisted users."""

    model = User

    async def get_by_firebase_uid(self, firebase_uid: str) -> User | None:
        """Get user by identity-provider UID."""
        result = await self.session.execute(select(User).where(User.firebase_uid == firebase_uid))
        return result.scalar_one_or_none()
