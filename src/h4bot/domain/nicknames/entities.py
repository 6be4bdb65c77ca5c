"""Entities for the nicknames bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from h4bot.domain.nicknames.value_objects import OutcomeStatus, SkipReason
from h4bot.domain.shared.messages import DiscordUIMessages
from h4bot.domain.shared.types import DiscordSnowflake, NonEmptyStr


class Member(BaseModel):
    """Read-only snapshot of a guild member as seen by the rename engine.

    ``mutable`` is False for identities the platform never lets us rename
    (the guild owner and the bot's own account).
    """

    model_config = ConfigDict(frozen=True, strict=True)

    id: DiscordSnowflake
    display_name: NonEmptyStr
    mutable: bool = True

    @property
    def mention(self) -> str:
        return DiscordUIMessages.MENTION_USER.format(user_id=self.id)


class MutationOutcome(BaseModel):
    """Per-member result of a rename attempt."""

    model_config = ConfigDict(frozen=True, strict=True)

    member_id: DiscordSnowflake
    status: OutcomeStatus
    label: str | None = None
    reason: SkipReason | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def succeeded(cls, member_id: int, label: str) -> MutationOutcome:
        return cls(member_id=member_id, status=OutcomeStatus.SUCCEEDED, label=label)

    @classmethod
    def skipped(cls, member_id: int, reason: SkipReason = SkipReason.PROTECTED) -> MutationOutcome:
        return cls(member_id=member_id, status=OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(
        cls, member_id: int, error: str, *, error_code: str | None = None, label: str | None = None
    ) -> MutationOutcome:
        return cls(
            member_id=member_id,
            status=OutcomeStatus.FAILED,
            error=error,
            error_code=error_code,
            label=label,
        )

    @property
    def is_success(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED


class BatchResult(BaseModel):
    """Aggregate result of one rename batch, in dispatch order."""

    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    outcomes: tuple[MutationOutcome, ...] = Field(default_factory=tuple)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def succeeded(self) -> int:
        return self._count(OutcomeStatus.SUCCEEDED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def succeeded_ids(self) -> list[int]:
        return [o.member_id for o in self.outcomes if o.is_success]

    @property
    def mentions(self) -> list[str]:
        return [DiscordUIMessages.MENTION_USER.format(user_id=i) for i in self.succeeded_ids]

    @property
    def is_empty(self) -> bool:
        return not self.outcomes

    @classmethod
    def empty(cls, guild_id: int) -> BatchResult:
        return cls(guild_id=guild_id)
