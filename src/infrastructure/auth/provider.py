"""Authentication provider protocol."""

from typing import Any, Optional, Protocol
from uuid import UUID

from domain.entities.principal import Principal


def principal_from_claims(claims: dict[str, Any]) -> Optional[Principal]:
    """Build a Principal from JWT claims or a Supabase ``user`` object.

    Access tokens carry the id in ``sub``; the auth REST API returns it as
    ``id`` together with ``email_confirmed_at``.
    """
    raw_id = claims.get("sub") or claims.get("id")
    if not raw_id:
        return None
    try:
        principal_id = UUID(str(raw_id))
    except ValueError:
        return None

    metadata = claims.get("user_metadata") or {}
    email_confirmed = bool(
        claims.get("email_confirmed_at")
        or claims.get("confirmed_at")
        or claims.get("email_verified") is True
        or metadata.get("email_verified") is True
    )

    return Principal(
        principal_id=principal_id,
        email=claims.get("email") or None,
        email_confirmed=email_confirmed,
        metadata=dict(metadata),
    )


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[Principal]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            Principal if valid, None if invalid
        """
        ...

    def create_token(self, principal: Principal) -> str:
        """
        Create an authentication token for a principal.

        Args:
            principal: The identity to create a token for

        Returns:
            The generated token string
        """
        ...
