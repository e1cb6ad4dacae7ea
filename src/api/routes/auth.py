"""OAuth / magic-link callback."""

from urllib.parse import urlencode

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from api.v1.dependencies import get_auth_client, get_profile_reconciler
from core.config import settings
from core.exceptions import AppException
from domain.services.profile_reconciler import ProfileReconciler
from infrastructure.auth.supabase_auth import SupabaseAuthClient

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["auth"])


def _signup_error_redirect(message: str) -> RedirectResponse:
    query = urlencode({"error": message})
    return RedirectResponse(
        f"{settings.frontend_url.rstrip('/')}/authentication/signup?{query}"
    )


@router.get(
    "/callback",
    response_class=RedirectResponse,
    summary="Finish an OAuth or magic-link sign-in",
    responses={307: {"description": "Redirect to the dashboard or back to sign-up"}},
)
async def auth_callback(
    code: str | None = Query(None),
    code_verifier: str | None = Query(None),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
    reconciler: ProfileReconciler = Depends(get_profile_reconciler),
) -> RedirectResponse:
    """Exchange the auth code, make sure the profile exists, then redirect."""
    if not code:
        return _signup_error_redirect("missing_code")

    try:
        principal = await auth_client.exchange_auth_code(code, code_verifier)
        result = await reconciler.ensure(principal)
    except AppException as exc:
        logger.warning(
            "auth_callback_failed",
            error_code=exc.error_code.value,
            message=exc.message,
        )
        return _signup_error_redirect(exc.message)

    logger.info(
        "auth_callback_completed",
        profile_id=str(result.profile.id),
        outcome=result.outcome.value,
    )
    return RedirectResponse(f"{settings.frontend_url.rstrip('/')}/dashboard")
