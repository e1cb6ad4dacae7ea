"""Principal value object (identity asserted by the auth provider)."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class Principal:
    """An authenticated identity, independent of application data.

    Created and destroyed entirely by the auth provider (Supabase Auth);
    read-only to this service.
    """

    principal_id: UUID
    email: str | None = None
    email_confirmed: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def normalized_email(self) -> str | None:
        """Trimmed, lower-cased email, or None when absent/blank."""
        if not self.email:
            return None
        email = self.email.strip().lower()
        return email or None

    @property
    def email_local_part(self) -> str | None:
        """The part of the email before ``@``."""
        email = self.normalized_email
        if not email:
            return None
        return email.split("@", 1)[0] or None

    def hint(self, *keys: str) -> str | None:
        """First non-blank string metadata value among ``keys``."""
        for key in keys:
            value = self.metadata.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None
