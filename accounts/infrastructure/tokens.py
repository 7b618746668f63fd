"""
Bearer credential verification.

Access tokens are HS256-signed JWTs carrying the account id (``sub``),
``email`` and ``role``. Issuing tokens belongs to the login flow of the
wider system; ``issue_access_token`` exists for operators and tests.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from django.conf import settings

from core.domain.exceptions import UnauthenticatedError
from core.domain.value_objects import Caller

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def _secret() -> str:
    return getattr(settings, "ACCESS_TOKEN_SECRET", settings.SECRET_KEY)


def _algorithm() -> str:
    return getattr(settings, "ACCESS_TOKEN_ALGORITHM", "HS256")


def issue_access_token(
    account_id: uuid.UUID,
    email: str,
    role: str,
    lifetime: Optional[timedelta] = None,
) -> str:
    """
    Sign an access token for an account.

    Args:
        account_id: Account UUID, stored as ``sub``
        email: Account email
        role: Account role
        lifetime: Token lifetime (defaults to ACCESS_TOKEN_LIFETIME_SECONDS)

    Returns:
        Encoded JWT
    """
    if lifetime is None:
        lifetime = timedelta(seconds=getattr(settings, "ACCESS_TOKEN_LIFETIME_SECONDS", 3600))
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(account_id),
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, _secret(), algorithm=_algorithm())


class JWTCredentialVerifier:
    """Decodes bearer credentials into a Caller."""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        self.secret = secret
        self.algorithm = algorithm

    def verify(self, token: Optional[str]) -> Caller:
        """
        Verify a bearer token.

        Args:
            token: Raw JWT (without the ``Bearer`` prefix)

        Returns:
            Caller extracted from the token claims

        Raises:
            UnauthenticatedError: If the token is missing, malformed,
                badly signed, expired or lacks required claims
        """
        if not token:
            raise UnauthenticatedError("Authorization header missing", reason="missing")

        try:
            payload = jwt.decode(
                token,
                self.secret or _secret(),
                algorithms=[self.algorithm or _algorithm()],
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired access token")
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE, reason="expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid access token: {e}")
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE, reason="invalid") from e

        subject = payload.get("sub") or payload.get("id")
        role = payload.get("role")
        if not subject or not role:
            logger.warning("Access token without subject or role claim")
            raise UnauthenticatedError("Invalid token payload", reason="payload")

        try:
            caller_id = uuid.UUID(str(subject))
        except ValueError as e:
            logger.warning(f"Access token with malformed subject: {subject}")
            raise UnauthenticatedError("Invalid token payload", reason="payload") from e

        return Caller(id=caller_id, email=payload.get("email") or "", role=str(role))


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token part of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
