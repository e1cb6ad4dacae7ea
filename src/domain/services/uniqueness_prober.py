"""Handle availability checks against the profile store."""

from domain.repositories.profile_repository import IProfileRepository


class UniquenessProber:
    """Point lookup on the case-insensitive handle index.

    Informs, does not reserve: two callers may both see a handle as free.
    Lookup failures propagate as ``StorageUnavailableError`` and are never
    read as "available".
    """

    def __init__(self, profiles: IProfileRepository) -> None:
        self._profiles = profiles

    async def is_taken(self, handle: str) -> bool:
        """True if some profile already owns ``handle``."""
        return await self._profiles.get_by_handle(handle) is not None
