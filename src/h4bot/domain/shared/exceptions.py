"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class MemberUpdateError(DomainError):
    """Raised when the platform rejects a single member update.

    Covers missing permissions, hierarchy violations and rate-limit rejections.
    Aggregated per member; never aborts a batch.
    """

    def __init__(
        self,
        member_id: int,
        message: str | None = None,
        *,
        status: int | None = None,
        retry_after: float | None = None,
    ) -> None:
        msg = message or f"Could not update member {member_id}"
        super().__init__(msg, code="MEMBER_UPDATE_FAILED")
        self.member_id = member_id
        self.status = status
        self.retry_after = retry_after

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429


class MemberGatewayError(DomainError):
    """Raised when the member list or the platform API cannot be reached at all."""

    def __init__(self, guild_id: int, message: str | None = None) -> None:
        msg = message or f"Could not reach members of guild {guild_id}"
        super().__init__(msg, code="MEMBER_GATEWAY_ERROR")
        self.guild_id = guild_id


class ResolutionError(DomainError):
    """Raised when a source reference cannot be resolved to a playable track."""

    def __init__(self, source_ref: str, message: str | None = None) -> None:
        msg = message or f"Could not resolve '{source_ref}'"
        super().__init__(msg, code="RESOLUTION_ERROR")
        self.source_ref = source_ref

