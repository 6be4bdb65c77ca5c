"""Outcome types for binding a guild to a voice channel."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ...domain.shared.types import ChannelIdField


class JoinStatus(Enum):
    JOINED = "joined"
    ALREADY_JOINED = "already_joined"
    NOT_IN_VOICE = "not_in_voice"
    CHANNEL_MISMATCH = "channel_mismatch"
    VOICE_ERROR = "voice_error"


class JoinResult(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    status: JoinStatus
    channel_id: ChannelIdField | None = None

    @property
    def is_success(self) -> bool:
        return self.status in {JoinStatus.JOINED, JoinStatus.ALREADY_JOINED}
