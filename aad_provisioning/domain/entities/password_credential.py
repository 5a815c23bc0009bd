"""Password credential entity representing an application secret."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

DEFAULT_VALIDITY_YEARS = 1


def _add_years(moment: datetime, years: int) -> datetime:
    """Shift a timestamp by whole years, clamping Feb 29 to Feb 28."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is present."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


@dataclass(slots=True)
class PasswordCredential:
    """
    A client secret attached to an application.

    The validity window is held in its ISO-8601 wire form (``start``/``end``);
    ``start_date``/``end_date`` convert to and from ``datetime``. When no window
    is given, it starts now and lasts one year.
    """

    value: str | None = None
    key_id: UUID = field(default_factory=uuid4)
    start: str | None = None
    end: str | None = None

    def __post_init__(self) -> None:
        """Fill in a default validity window."""
        if self.start is None:
            self.start_date = datetime.now(UTC)
        if self.end is None:
            self.end_date = _add_years(self.start_date, DEFAULT_VALIDITY_YEARS)

    @property
    def start_date(self) -> datetime:
        """Start of the validity window."""
        return _parse_timestamp(self.start)

    @start_date.setter
    def start_date(self, value: datetime) -> None:
        self.start = value.isoformat()

    @property
    def end_date(self) -> datetime:
        """End of the validity window."""
        return _parse_timestamp(self.end)

    @end_date.setter
    def end_date(self, value: datetime) -> None:
        self.end = value.isoformat()
