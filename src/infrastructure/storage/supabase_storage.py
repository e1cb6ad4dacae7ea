"""Supabase Storage blob store (public avatar bucket)."""

from typing import Optional
from urllib.parse import quote

import httpx
import structlog

from core.config import settings
from core.exceptions import StorageUnavailableError

logger = structlog.get_logger()

CACHE_CONTROL_SECONDS = 3600


class SupabaseBlobStore:
    """IBlobStore implementation over the Supabase Storage REST API.

    Uploads overwrite (``x-upsert``) and objects are served from the bucket's
    public URL.
    """

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        service_key: str = settings.supabase_service_role_key,
        bucket: str = settings.avatar_bucket,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._bucket = bucket
        self._timeout = timeout
        self._transport = transport

    def public_url(self, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self._bucket}/{quote(path)}"

    async def upload(self, data: bytes, path: str, content_type: str | None = None) -> str:
        """Upload ``data`` at ``path`` and return its public URL."""
        headers = {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
            "x-upsert": "true",
            "cache-control": f"max-age={CACHE_CONTROL_SECONDS}",
            "Content-Type": content_type or "application/octet-stream",
        }
        url = f"{self._base_url}/storage/v1/object/{self._bucket}/{quote(path)}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(url, content=data, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("blob_upload_failed", path=path, error=str(exc))
            raise StorageUnavailableError("Could not store the uploaded file") from exc

        logger.info("blob_uploaded", path=path, size=len(data))
        return self.public_url(path)
