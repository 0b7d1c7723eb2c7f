"""Request dependencies: caller identity resolution."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import decode_access_token

# auto_error=False: a missing header resolves to None and the service layer
# answers with Unauthenticated in the usual result shape
bearer_scheme = HTTPBearer(auto_error=False)


async def get_caller_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Caller identity (token subject), or None when absent or invalid."""
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)
