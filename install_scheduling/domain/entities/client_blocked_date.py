"""Client blocked date entity."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ClientBlockedDate:
    """A date on which the client cannot host an installation."""

    client_id: UUID
    blocked_date: date
    id: UUID = field(default_factory=uuid4)
    reason: Optional[str] = None
