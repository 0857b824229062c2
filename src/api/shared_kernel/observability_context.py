"""Request metadata attached to every probe event."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Who did what, where, for one request or background job.

    Probes created with ``with_context`` spread ``as_dict()`` into each
    event they log.

    Example:
        context = ObservationContext(request_id="req-123", space_id="01H...")
        probe = DefaultGroupServiceProbe().with_context(context)
    """

    request_id: str | None = None
    actor_id: str | None = None
    space_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Flatten to log kwargs; unset identifiers are left out."""
        identifiers = {
            "request_id": self.request_id,
            "actor_id": self.actor_id,
            "space_id": self.space_id,
        }
        return {
            **{key: value for key, value in identifiers.items() if value is not None},
            **self.extra,
        }

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        return replace(self, extra={**self.extra, **kwargs})
