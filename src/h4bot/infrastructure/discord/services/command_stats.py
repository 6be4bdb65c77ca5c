"""Per-command invocation counter.

Incremented by the bot after every completed slash command.

This is intentionally in-memory; it resets on bot restart.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class CommandStats:
    """Counts completed invocations per command name."""

    _counts: Counter[str] = field(default_factory=Counter)

    def record(self, command_name: str) -> int:
        """Count one invocation and return the new total for that command."""
        self._counts[command_name] += 1
        return self._counts[command_name]

    def count(self, command_name: str) -> int:
        return self._counts[command_name]

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        return self._counts.most_common(n)

    def reset(self) -> None:
        self._counts.clear()
