"""Request-scoped correlation context."""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Correlation data for the active request.

    Set up by the hosting layer and passed explicitly into result
    generation so error pages can show an id support staff can search for.
    """

    request_id: str

    @classmethod
    def create(cls) -> RequestContext:
        """Create a context with a freshly allocated request id."""
        return cls(request_id=uuid.uuid4().hex)
