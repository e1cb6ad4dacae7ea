"""Blob store protocol (avatar images)."""

from typing import Protocol


class IBlobStore(Protocol):
    """Stores opaque bytes and hands back a public reference."""

    async def upload(self, data: bytes, path: str, content_type: str | None = None) -> str:
        """Upload ``data`` at ``path`` (overwriting) and return its public URL."""
        ...
