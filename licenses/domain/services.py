"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Tuple, Union

from core.domain.exceptions import InvalidArgumentError, InvalidFormatError
from licenses.domain.license import License

DATE_FORMAT = "%Y-%m-%d"
END_OF_DAY = time(23, 59, 59)


class ExpiryPolicy:
    """
    Turns calendar dates into license expiry timestamps.

    Every expiry is pinned to 23:59:59 of its day in the reference
    timezone of the service.
    """

    def __init__(self, reference_tz: tzinfo = timezone.utc):
        self.reference_tz = reference_tz

    def end_of_day(self, day: date) -> datetime:
        """Return 23:59:59 of ``day`` in the reference timezone."""
        return datetime.combine(day, END_OF_DAY, tzinfo=self.reference_tz)

    def parse_date(self, value: Union[str, date, None]) -> Optional[date]:
        """
        Parse a ``YYYY-MM-DD`` calendar date.

        Args:
            value: Date string, date object or None

        Returns:
            The parsed date, or None for empty input

        Raises:
            InvalidFormatError: If the string is not a valid date
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.astimezone(self.reference_tz).date() if value.tzinfo else value.date()
        if isinstance(value, date):
            return value
        text = str(value).strip()
        if not text:
            return None
        try:
            return datetime.strptime(text, DATE_FORMAT).date()
        except ValueError as e:
            raise InvalidFormatError("Invalid expiry date format. Use YYYY-MM-DD") from e

    def parse_expiry(self, value: Union[str, date, None]) -> Optional[datetime]:
        """Parse an optional expiry date and normalize it to end of day."""
        day = self.parse_date(value)
        if day is None:
            return None
        return self.end_of_day(day)

    def extend(
        self,
        current_expiry: Optional[datetime],
        days: int,
        current_time: Optional[datetime] = None,
    ) -> datetime:
        """
        Extend an expiry by a number of days.

        The extension counts from the current expiry when one is set,
        whether it lies in the past or the future, otherwise from now.
        """
        if days is None or int(days) < 1:
            raise InvalidArgumentError("extend_days must be a positive number of days")
        base = current_expiry or current_time or datetime.now(timezone.utc)
        base_day = base.astimezone(self.reference_tz).date() if base.tzinfo else base.date()
        return self.end_of_day(base_day + timedelta(days=int(days)))

    def from_period(self, start: Optional[date], period_days: int, today: date) -> datetime:
        """Expiry for a license running ``period_days`` from ``start`` (or today)."""
        if int(period_days) < 1:
            raise InvalidArgumentError("license_period_days must be a positive number of days")
        return self.end_of_day((start or today) + timedelta(days=int(period_days)))


class LicenseValidator:
    """Domain service for license validation."""

    @staticmethod
    def verify(
        license: Optional[License], current_time: Optional[datetime] = None
    ) -> Tuple[bool, str]:
        """
        Verify a license looked up by key.

        Args:
            license: License entity or None when the key is unknown
            current_time: Reference time for the expiry check

        Returns:
            Tuple of (is_valid, message)
        """
        if license is None:
            return False, "License key not found"
        if not license.is_active:
            return False, "License is inactive"
        if license.is_expired(current_time):
            return False, "License has expired"
        return True, "License is valid"
