"""
Rate limiting middleware.

Implements fixed-window rate limiting per client address for the
unauthenticated license verification endpoint.
"""

import hashlib
import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import rate_limited_requests_total

RATE_LIMITED_PATHS = ("/api/v1/license/verify",)


class RateLimitMiddleware:
    """
    Rate limiting middleware per client address.

    Counters live in the Django cache.
    Default limit: VERIFY_RATE_LIMIT requests per minute.
    """

    DEFAULT_RATE_LIMIT = 30  # requests per window
    RATE_LIMIT_WINDOW = 60  # seconds

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _get_client_address(self, request: HttpRequest) -> str:
        """
        Extract the client address.

        Uses the first X-Forwarded-For hop when present.
        """
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")

    def _get_rate_limit_key(self, client: str, path: str) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            client: Client address
            path: Rate limited path

        Returns:
            Cache key string
        """
        client_hash = hashlib.sha256(f"{client}:{path}".encode()).hexdigest()[:16]
        return f"rate_limit:{client_hash}"

    def _get_limit(self) -> int:
        return int(getattr(settings, "VERIFY_RATE_LIMIT", self.DEFAULT_RATE_LIMIT))

    def _check_rate_limit(self, cache_key: str, limit: int) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            cache_key: Per-client cache key
            limit: Requests allowed per window

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.RATE_LIMIT_WINDOW)
        reset_time = (window_start + 1) * self.RATE_LIMIT_WINDOW
        full_key = f"{cache_key}:{window_start}"

        current_count = cache.get(full_key, 0)
        if current_count >= limit:
            return False, 0, reset_time

        # add() is a no-op when the key exists
        if cache.add(full_key, 1, timeout=self.RATE_LIMIT_WINDOW):
            new_count = 1
        else:
            new_count = cache.incr(full_key, 1)

        return True, max(0, limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        path = request.path.rstrip("/")
        if path not in RATE_LIMITED_PATHS:
            return self.get_response(request)

        limit = self._get_limit()
        cache_key = self._get_rate_limit_key(self._get_client_address(request), path)
        is_allowed, remaining, reset_time = self._check_rate_limit(cache_key, limit)

        if not is_allowed:
            rate_limited_requests_total.labels(endpoint=path).inc()
            response = JsonResponse(
                {
                    "status": False,
                    "message": "Too many requests. Please try again later.",
                    "code": "RATE_LIMIT_EXCEEDED",
                },
                status=429,
            )
        else:
            response = self.get_response(request)

        # Rate limit headers (RFC 6585)
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        if not is_allowed:
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))

        return response
