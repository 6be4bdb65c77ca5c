"""
Shared Domain Kernel

Types, validators and exceptions shared across all bounded contexts.
"""

from h4bot.domain.shared.exceptions import (
    DomainError,
    MemberGatewayError,
    MemberUpdateError,
    ResolutionError,
)

__all__ = [
    "DomainError",
    "MemberUpdateError",
    "MemberGatewayError",
    "ResolutionError",
]
