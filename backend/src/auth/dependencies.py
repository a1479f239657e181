# pyright: reportMissingTypeStubs=false
"""
Authentication dependencies for FastAPI.

The public listing endpoints are open; editing clinic hours requires a
bearer token issued to a directory admin whose email is whitelisted in
ADMIN_EMAILS.
"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core import config
from services.jwt_service import jwt_service, TokenPayload

logger = logging.getLogger(__name__)


class AdminContext:
    """Authenticated admin extracted from a JWT token."""

    def __init__(self, email: str, subject: str, name: Optional[str] = None):
        self.email = email
        self.subject = subject
        self.name = name

    def __repr__(self) -> str:
        return f"AdminContext(email='{self.email}')"


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[TokenPayload]:
    """Extract and validate JWT token payload."""
    if not credentials:
        return None
    return jwt_service.verify_token(credentials.credentials)


def require_admin(
    payload: Optional[TokenPayload] = Depends(get_token_payload)
) -> AdminContext:
    """Require a valid admin token."""
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication credentials not provided"
        )

    if payload.role != "admin" or payload.email not in config.ADMIN_EMAILS:
        logger.warning(f"Rejected admin request for {payload.email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )

    return AdminContext(email=payload.email, subject=payload.sub, name=payload.name)
