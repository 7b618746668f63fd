"""
Bearer token authentication middleware.

This middleware verifies the bearer credential on license, superadmin
and admin APIs and attaches the authenticated caller to the request.
"""

import logging
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from accounts.infrastructure.tokens import JWTCredentialVerifier, extract_bearer_token
from core.domain.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = (
    "/api/v1/license/",
    "/api/v1/superadmin/",
    "/api/v1/admin/",
)

PUBLIC_PATHS = (
    "/api/v1/license/verify",
)


class BearerTokenAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for bearer token authentication.

    This middleware:
    1. Skips public paths (verify, health checks, docs, admin site)
    2. Verifies the bearer token on protected API prefixes
    3. Sets ``request.caller`` or returns 401 Unauthorized
    """

    verifier_class = JWTCredentialVerifier

    def __init__(self, get_response=None):
        super().__init__(get_response)
        self.verifier = self.verifier_class()

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        request.caller = None  # type: ignore

        if not self._requires_auth(request.path):
            return None

        token = extract_bearer_token(request.headers.get("Authorization"))
        try:
            request.caller = self.verifier.verify(token)  # type: ignore
        except UnauthenticatedError as e:
            logger.warning(
                "Authentication failed: %s",
                e.reason,
                extra={"path": request.path, "reason": e.reason},
            )
            return JsonResponse(
                {"status": False, "message": e.message, "code": e.code},
                status=401,
            )
        return None

    def _requires_auth(self, path: str) -> bool:
        """
        Check if this path needs a bearer credential.

        Args:
            path: Request path

        Returns:
            True if the path is protected
        """
        normalized = path.rstrip("/")
        if normalized in PUBLIC_PATHS:
            return False
        return path.startswith(PROTECTED_PREFIXES)
