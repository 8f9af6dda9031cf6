"""User directory endpoint."""

from fastapi import APIRouter

from src.circuitweb.api.dependencies import AuthServiceDep
from src.circuitweb.schemas.user import UserListResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(service: AuthServiceDep) -> UserListResponse:
    """List all users.

    Accounts come from the identity provider; when it returns nothing or
    fails, the local users table is listed instead.
    """
    return UserListResponse(users=await service.list_all_users())
