"""Audience context for catalog reads.

Every read carries the audience it is made on behalf of. Admin
callers see the whole catalog; shop callers only see what the
visibility rules allow.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Self


class Audience(str, Enum):
    """Who a catalog read is made for."""

    ADMIN = "admin"
    SHOP = "shop"

    @property
    def is_admin(self) -> bool:
        """Check if the audience bypasses visibility rules."""
        return self is Audience.ADMIN


@dataclass(frozen=True)
class RequestContext:
    """Per-request marker threaded through every service call.

    Attributes:
        audience: Audience of the request.
        request_id: Request ID for log correlation.
    """

    audience: Audience = Audience.SHOP
    request_id: str | None = None

    @classmethod
    def admin(cls, request_id: str | None = None) -> Self:
        """Create an admin context."""
        return cls(audience=Audience.ADMIN, request_id=request_id)

    @classmethod
    def shop(cls, request_id: str | None = None) -> Self:
        """Create a shop context."""
        return cls(audience=Audience.SHOP, request_id=request_id)

    def log_context(self) -> dict[str, Any]:
        """Get key/value pairs to bind on a structured logger.

        Returns:
            Audience and request ID.
        """
        return {"audience": self.audience.value, "request_id": self.request_id}
