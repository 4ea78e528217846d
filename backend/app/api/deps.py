"""
Auth Gate.

Verifies the bearer token on protected routes and hands the user id to the
endpoint. Stateless: the token alone decides, no database lookup.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import get_token_subject

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 like every other failure
bearer_scheme = HTTPBearer(scheme_name="Bearer", auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    """
    Dependency returning the authenticated user id.

    Raises HTTPException 401 if the token is missing, malformed, expired or
    signed with another secret.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = get_token_subject(credentials.credentials)
    if user_id is None:
        logger.info("Rejected invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id
