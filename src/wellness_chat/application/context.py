"""
application.context - Request-scoped session context.

Every service call that acts on behalf of a user receives its context
explicitly; there is no global "current user".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4


@dataclass
class SessionContext:
    """Per-request/session context passed through all layers.

    Attributes:
        user_id:     The user the adapter is acting for.
        request_id:  Unique per request, for tracing/logging.
    """
    user_id: int
    request_id: str = field(default_factory=lambda: uuid4().hex)

    def new_request(self) -> None:
        """Start a new request within the same session."""
        self.request_id = uuid4().hex
