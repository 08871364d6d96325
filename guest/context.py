from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CallerContext:
    """Who is calling a booking operation: passed explicitly, never read globally."""

    user_id: Optional[int]
    is_admin: bool = False

    @classmethod
    def from_request(cls, request) -> "CallerContext":
        user = request.user
        if user is None or not user.is_authenticated:
            return cls(user_id=None, is_admin=False)
        return cls(user_id=user.pk, is_admin=user.is_staff)

    @classmethod
    def admin(cls) -> "CallerContext":
        return cls(user_id=None, is_admin=True)
