"""Follow edge entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class Follow:
    """Directed edge: ``follower_id`` follows ``following_id``."""

    follower_id: UUID
    following_id: UUID
    created_at: datetime = field(default_factory=datetime.utcnow)
