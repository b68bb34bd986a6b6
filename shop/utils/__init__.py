"""유틸리티 모듈"""

from .validators import (
    ItemValidator,
    MemberValidator,
    OrderValidator,
    ValidationError,
    raise_if_invalid,
)

__all__ = [
    "ItemValidator",
    "MemberValidator",
    "OrderValidator",
    "ValidationError",
    "raise_if_invalid",
]
