"""Caller identity dependency."""

from typing import Annotated

from fastapi import Depends, Header

from src.circuitweb.api.dependencies.services import AuthServiceDep
from src.circuitweb.core.config import get_settings
from src.circuitweb.core.exceptions import Unauthenticated
from src.circuitweb.core.logging import bind_user_context


async def get_caller_id(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
    x_user_id: Annotated[str | None, Header(alias="X-User-ID")] = None,
) -> str:
    """Resolve the caller's identity-provider UID.

    A bearer ID token is verified with the identity provider and wins over
    everything else. Without one, the X-User-ID header is trusted as-is
    (unless TRUST_USER_ID_HEADER is disabled).

    Raises:
        Unauthenticated: No identity was supplied, or the token was rejected.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() == "bearer":
        uid = await auth_service.verify_token(token)
    elif x_user_id and x_user_id.strip() and get_settings().trust_user_id_header:
        uid = x_user_id.strip()
    else:
        raise Unauthenticated("User not authenticated")

    bind_user_context(uid)
    return uid


CallerId = Annotated[str, Depends(get_caller_id)]
