"""Supabase Auth REST client (OAuth / magic-link code exchange)."""

from typing import Any, Optional

import httpx
import structlog

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.principal import Principal
from infrastructure.auth.provider import principal_from_claims

logger = structlog.get_logger()


class SupabaseAuthClient:
    """Exchanges a PKCE auth code for a session and its principal."""

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        api_key: str = settings.supabase_anon_key,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def exchange_auth_code(
        self, code: str, code_verifier: Optional[str] = None
    ) -> Principal:
        """Exchange ``code`` for a session and return its principal.

        Raises:
            AuthenticationError: If Supabase rejects the code or is unreachable.
        """
        body: dict[str, Any] = {"auth_code": code}
        if code_verifier:
            body["code_verifier"] = code_verifier

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"{self._base_url}/auth/v1/token",
                    params={"grant_type": "pkce"},
                    json=body,
                    headers={
                        "apikey": self._api_key,
                        "Authorization": f"Bearer {self._api_key}",
                    },
                )
        except httpx.HTTPError as exc:
            logger.error("auth_code_exchange_failed", error=str(exc))
            raise AuthenticationError(
                message="Authentication service unavailable",
                error_code=ErrorCode.UNAUTHORIZED,
            ) from exc

        if response.status_code != 200:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            message = (
                payload.get("error_description")
                or payload.get("msg")
                or payload.get("error")
                or "Invalid authentication code"
            )
            logger.warning(
                "auth_code_rejected",
                status_code=response.status_code,
                message=message,
            )
            raise AuthenticationError(message=message, error_code=ErrorCode.INVALID_TOKEN)

        principal = principal_from_claims(response.json().get("user") or {})
        if principal is None:
            raise AuthenticationError(
                message="Authentication response carried no user",
                error_code=ErrorCode.INVALID_TOKEN,
            )
        return principal
