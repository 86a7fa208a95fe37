"""
Session API routes.
"""

from fastapi import APIRouter, Depends

from gardien.domain.entities.session_claims import SessionClaims
from gardien.presentation.api.middleware.auth import get_current_session
from gardien.presentation.schemas.verification_schemas import SessionClaimsResponse

router = APIRouter(prefix="/session", tags=["Session"])


@router.get(
    "/me",
    response_model=SessionClaimsResponse,
    summary="Describe current session",
    description="Validate bearer token against the live binding",
)
async def get_session(
    claims: SessionClaims = Depends(get_current_session),
) -> SessionClaimsResponse:
    return SessionClaimsResponse(
        identity_id=claims.identity_id,
        platform=claims.platform.value,
        wallet_address=claims.wallet_address,
        issued_at=claims.issued_at,
        expires_at=claims.expires_at,
    )
