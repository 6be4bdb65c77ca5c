"""Immutable value objects for the nicknames bounded context."""

from __future__ import annotations

from enum import Enum


class SelectionPolicy(Enum):
    """How many members a rename batch touches."""

    SINGLE = "single"
    MULTIPLE = "multiple"
    ALL = "all"

    @property
    def display_name(self) -> str:
        return {
            SelectionPolicy.SINGLE: "Balls a single person",
            SelectionPolicy.MULTIPLE: "Balls multiple people",
            SelectionPolicy.ALL: "Balls everyone",
        }[self]


class OutcomeStatus(Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(Enum):
    PROTECTED = "protected"
