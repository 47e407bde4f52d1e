from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shared.http.errors import UnauthorizedError

from .jwt_handler import InvalidTokenError, TokenIdentity, verify_access_token

# Defines the expected header format (Bearer <token>)
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> TokenIdentity:
    """Dependency to validate the JWT and return the caller's identity."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token required")

    try:
        identity = verify_access_token(credentials.credentials)
    except InvalidTokenError:
        # Expired and tampered tokens get the same answer
        raise UnauthorizedError("Invalid or expired token")

    # Store in request state for downstream use (like rate limiting)
    request.state.user = identity
    return identity
