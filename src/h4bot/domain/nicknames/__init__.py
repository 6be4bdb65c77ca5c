"""Nickname bounded context: who gets renamed, and to what."""

from h4bot.domain.nicknames.entities import BatchResult, Member, MutationOutcome
from h4bot.domain.nicknames.pool import NamePool
from h4bot.domain.nicknames.services import MemberSelector
from h4bot.domain.nicknames.value_objects import OutcomeStatus, SelectionPolicy, SkipReason

__all__ = [
    "Member",
    "MutationOutcome",
    "BatchResult",
    "NamePool",
    "MemberSelector",
    "SelectionPolicy",
    "OutcomeStatus",
    "SkipReason",
]
