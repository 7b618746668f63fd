"""
License key generation.

Keys look like ``APP-XXXX-YYYY-ZZZZ``. Segments are drawn from an
alphabet without the easily confused characters I, O, 0 and 1.
"""

import logging
import secrets

from core.domain.exceptions import KeyspaceExhaustedError

logger = logging.getLogger(__name__)

KEY_PREFIX = "APP"
KEY_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
SEGMENT_LENGTH = 4
SEGMENT_COUNT = 3
DEFAULT_MAX_ATTEMPTS = 10


def generate_license_key(prefix: str = KEY_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-YYYY-ZZZZ.

    Args:
        prefix: Key prefix

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(SEGMENT_LENGTH))
        for _ in range(SEGMENT_COUNT)
    ]
    return f"{prefix}-{'-'.join(parts)}"


class LicenseKeyGenerator:
    """Domain service producing collision-checked license keys."""

    @staticmethod
    def generate() -> str:
        """
        Generate a candidate license key.

        Returns:
            Generated license key string
        """
        return generate_license_key()

    @classmethod
    async def generate_unique(
        cls,
        repository: "LicenseRepository",  # noqa: F821
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> str:
        """
        Generate a key that does not exist in the store yet.

        Args:
            repository: License repository used for the existence check
            max_attempts: Number of candidates to try

        Returns:
            A license key unknown to the repository

        Raises:
            KeyspaceExhaustedError: If every candidate collided
        """
        for attempt in range(1, max_attempts + 1):
            candidate = cls.generate()
            if not await repository.exists_by_key(candidate):
                return candidate
            logger.warning("License key collision on attempt %s/%s", attempt, max_attempts)

        logger.error("No unique license key after %s attempt(s)", max_attempts)
        raise KeyspaceExhaustedError()
