"""Date/time helpers.

- Always store and operate on timezone-aware UTC datetimes.
- Provide the Discord timestamp markup used in replies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from h4bot.domain.shared.messages import ErrorMessages


@dataclass(frozen=True, slots=True)
class UtcDateTime:
    """A tiny value-object wrapper around a timezone-aware UTC `datetime`."""

    dt: datetime

    def __post_init__(self) -> None:
        if self.dt.tzinfo is None:
            raise ValueError(ErrorMessages.TIMEZONE_REQUIRED_UTC_DATETIME)
        object.__setattr__(self, "dt", self.dt.astimezone(UTC))

    @classmethod
    def now(cls) -> UtcDateTime:
        return cls(datetime.now(UTC))

    @property
    def unix_seconds(self) -> int:
        return int(self.dt.timestamp())

    def discord_timestamp(self, style: str = "R") -> str:
        """Discord timestamp markup.

        Common styles: 'R' (relative), 'f' (short datetime).
        """
        return f"<t:{self.unix_seconds}:{style}>"


def utcnow() -> datetime:
    """Timezone-aware ``datetime`` in UTC."""
    return datetime.now(UTC)
