"""Identity reconciliation: map an authenticated principal to one profile."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

import structlog

from core.config import settings
from core.exceptions import (
    AuthRequiredError,
    EmailUnconfirmedError,
    HandleConflictError,
    UniqueViolationError,
)
from domain.entities.principal import Principal
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.handle_allocator import HandleAllocator
from domain.services.uniqueness_prober import UniquenessProber

logger = structlog.get_logger()

DEFAULT_DISPLAY_NAME = "User"
MAX_DISPLAY_NAME_LENGTH = 100

# Inserts are retried once after a unique violation: the row that caused the
# violation was committed by the competing writer, so the re-read finds it.
MAX_INSERT_RETRIES = 1


class ReconcileOutcome(StrEnum):
    """How a reconciliation arrived at its profile."""

    EXISTING = "existing"
    CREATED = "created"
    REKEYED = "rekeyed"


@dataclass(frozen=True)
class ReconcileResult:
    """A canonical profile plus how it was obtained."""

    profile: Profile
    outcome: ReconcileOutcome

    @property
    def created(self) -> bool:
        return self.outcome is ReconcileOutcome.CREATED


class ProfileReconciler:
    """Guarantee exactly one profile per principal before profile-dependent work.

    Read-then-act, with store unique constraints as the final arbiter:

    1. profile by id (the common case after first contact);
    2. profile by email; an orphan under another id is re-keyed in place;
    3. otherwise insert a new profile with an allocated handle;
    4. on a unique violation, re-read and retry the insert once.

    Safe to call concurrently for the same principal from several request
    paths: all callers converge on a single row.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        require_confirmed_email: bool = settings.require_confirmed_email,
        handle_max_length: int = settings.handle_max_length,
        handle_max_attempts: int = settings.handle_max_attempts,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._uow_factory = uow_factory
        self._require_confirmed_email = require_confirmed_email
        self._handle_max_length = handle_max_length
        self._handle_max_attempts = handle_max_attempts
        self._clock = clock

    async def reconcile(self, principal: Principal | None) -> Profile:
        """Return the canonical profile for ``principal``, creating it if needed.

        Raises:
            AuthRequiredError: If there is no principal.
            EmailUnconfirmedError: If confirmed email is required and missing.
            HandleConflictError: If the bounded insert retry is exhausted.
            StorageUnavailableError: If the store fails.
        """
        result = await self.ensure(principal)
        return result.profile

    async def ensure(
        self,
        principal: Principal | None,
        require_confirmed_email: bool | None = None,
    ) -> ReconcileResult:
        """Like ``reconcile`` but also reports how the profile was obtained.

        ``require_confirmed_email`` overrides the configured policy (service
        callers holding elevated credentials pass ``False``).
        """
        if principal is None:
            raise AuthRequiredError()

        if require_confirmed_email is None:
            require_confirmed_email = self._require_confirmed_email
        if require_confirmed_email and not principal.email_confirmed:
            raise EmailUnconfirmedError(principal.email)

        async with self._uow_factory() as uow:
            found = await self._find_existing(uow, principal)
            if found:
                return found
            return await self._create(uow, principal)

    async def _find_existing(
        self, uow: IUnitOfWork, principal: Principal
    ) -> ReconcileResult | None:
        profile = await uow.profiles.get(principal.principal_id)
        if profile:
            return ReconcileResult(profile, ReconcileOutcome.EXISTING)

        email = principal.normalized_email
        if not email:
            return None

        orphan = await uow.profiles.get_by_email(email)
        if not orphan:
            return None
        if orphan.id == principal.principal_id:
            return ReconcileResult(orphan, ReconcileOutcome.EXISTING)

        try:
            rekeyed = await uow.profiles.rekey(orphan.id, principal.principal_id, email)
            await uow.commit()
        except UniqueViolationError:
            # Another request for this principal got there first.
            await uow.rollback()
            profile = await uow.profiles.get(principal.principal_id)
            return ReconcileResult(profile, ReconcileOutcome.EXISTING) if profile else None

        if rekeyed is None:
            profile = await uow.profiles.get(principal.principal_id)
            return ReconcileResult(profile, ReconcileOutcome.EXISTING) if profile else None

        logger.info(
            "profile_rekeyed",
            old_profile_id=str(orphan.id),
            profile_id=str(principal.principal_id),
            handle=rekeyed.handle,
        )
        return ReconcileResult(rekeyed, ReconcileOutcome.REKEYED)

    async def _create(self, uow: IUnitOfWork, principal: Principal) -> ReconcileResult:
        display_name = (
            principal.hint("name", "display_name", "full_name")
            or principal.email_local_part
            or DEFAULT_DISPLAY_NAME
        )[:MAX_DISPLAY_NAME_LENGTH]
        base = (
            principal.hint("username", "user_name", "preferred_username")
            or principal.email_local_part
            or display_name
        )
        disambiguator = str(principal.principal_id)[:4]

        allocator = HandleAllocator(
            UniquenessProber(uow.profiles),
            max_attempts=self._handle_max_attempts,
            max_length=self._handle_max_length,
            clock=self._clock,
        )

        handle = ""
        for attempt in range(MAX_INSERT_RETRIES + 1):
            handle = await allocator.allocate(base, disambiguator)
            profile = Profile(
                id=principal.principal_id,
                handle=handle,
                display_name=display_name,
                email=principal.normalized_email,
            )
            try:
                created = await uow.profiles.create(profile)
                await uow.commit()
            except UniqueViolationError as exc:
                await uow.rollback()
                logger.warning(
                    "profile_insert_conflict",
                    profile_id=str(principal.principal_id),
                    constraint=exc.constraint,
                    handle=handle,
                    attempt=attempt,
                )
                found = await self._find_existing(uow, principal)
                if found:
                    return found
                continue

            logger.info(
                "profile_created",
                profile_id=str(created.id),
                handle=created.handle,
            )
            return ReconcileResult(created, ReconcileOutcome.CREATED)

        raise HandleConflictError(handle)
