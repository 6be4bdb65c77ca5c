"""Port interfaces implemented by infrastructure adapters."""

from h4bot.application.interfaces.audio_resolver import AudioResolver
from h4bot.application.interfaces.member_gateway import MemberGateway
from h4bot.application.interfaces.voice_adapter import VoiceAdapter

__all__ = ["AudioResolver", "MemberGateway", "VoiceAdapter"]
