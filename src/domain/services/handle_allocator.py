"""Handle sanitizing and allocation.

``sanitize`` turns an arbitrary display name or email local part into a
candidate handle. ``HandleAllocator`` probes the handle namespace and settles
on a free candidate with a bounded number of attempts. The allocator only
pre-checks: the unique index on ``lower(handle)`` is the final authority.
"""

import re
import time
from collections.abc import Callable
from typing import Protocol

import structlog

logger = structlog.get_logger()

MIN_HANDLE_LENGTH = 3
DEFAULT_MAX_LENGTH = 20
DEFAULT_MAX_ATTEMPTS = 50
FALLBACK_HANDLE = "user"

_INVALID_RUN = re.compile(r"[^a-z0-9_]+")
_UNDERSCORE_RUN = re.compile(r"_{2,}")


def sanitize(raw: str | None, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Normalize ``raw`` into a lowercase ``[a-z0-9_]`` handle.

    Runs of other characters become a single separator, separators left at
    either end by that replacement are dropped, and underscore runs collapse
    to one. Never returns an empty string.

    >>> sanitize("Jane Doe!!")
    'jane_doe'
    >>> sanitize("___a___b___")
    '_a_b_'
    >>> sanitize("")
    'user'
    """
    if not raw:
        return FALLBACK_HANDLE

    words = _INVALID_RUN.sub(" ", raw.lower()).strip()
    handle = _UNDERSCORE_RUN.sub("_", words.replace(" ", "_"))
    handle = handle[:max_length]
    return handle or FALLBACK_HANDLE


class HandleProber(Protocol):
    """Anything that can tell whether a handle is already in use."""

    async def is_taken(self, handle: str) -> bool: ...


class HandleAllocator:
    """Produce a handle that is free at the time of probing.

    Candidate order for ``allocate("alice", "ab01")``::

        alice, alice_ab01, alice_ab012, ..., alice_ab0150,
        alice_ab01_<last five digits of the clock in ms>

    A base shorter than three characters is never used on its own; its
    first candidate is ``base_<disambiguator>``. The last candidate is
    returned without probing, so allocation always terminates with some
    handle.
    """

    def __init__(
        self,
        prober: HandleProber,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        max_length: int = DEFAULT_MAX_LENGTH,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._prober = prober
        self._max_attempts = max_attempts
        self._max_length = max_length
        self._clock = clock

    async def allocate(self, base: str | None, disambiguator: str) -> str:
        """Return a free handle derived from ``base``.

        Args:
            base: Preferred handle, display name or email local part.
            disambiguator: Short identity-derived string (e.g. the first
                four characters of the principal id).

        Raises:
            StorageUnavailableError: If the prober cannot reach the store.
        """
        handle = sanitize(base, self._max_length)
        if len(handle) >= MIN_HANDLE_LENGTH and not await self._prober.is_taken(handle):
            return handle

        disambiguator = disambiguator.lower()
        for attempt in range(1, self._max_attempts + 1):
            suffix = str(attempt) if attempt > 1 else ""
            candidate = f"{handle}_{disambiguator}{suffix}"
            if not await self._prober.is_taken(candidate):
                return candidate

        millis = str(int(self._clock() * 1000))[-5:]
        fallback = f"{handle}_{disambiguator}_{millis}"
        logger.warning(
            "handle_allocation_exhausted",
            base=base,
            attempts=self._max_attempts,
            fallback=fallback,
        )
        return fallback
