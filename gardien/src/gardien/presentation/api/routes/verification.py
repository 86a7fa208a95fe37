"""
Wallet verification API routes.
"""

from fastapi import APIRouter, Depends, status

from gardien.application.services.challenge_orchestrator import (
    ChallengeOrchestrator,
)
from gardien.di.dependencies import get_orchestrator
from gardien.presentation.api.middleware.auth import require_service_client
from gardien.presentation.schemas.verification_schemas import (
    ChallengeRequest,
    ChallengeResponse,
    SessionResponse,
    VerifyRequest,
)

router = APIRouter(
    prefix="/verification",
    tags=["Verification"],
    dependencies=[Depends(require_service_client)],
)


# ================================================================
# Challenge Endpoint
# ================================================================


@router.post(
    "/challenge",
    response_model=ChallengeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request wallet challenge",
    description="Issue a single-use message for the wallet to sign",
)
async def request_challenge(
    request: ChallengeRequest,
    orchestrator: ChallengeOrchestrator = Depends(get_orchestrator),
) -> ChallengeResponse:
    """
    Issue verification challenge.

    Flow:
    1. Validate input
    2. Count attempt against rate limit
    3. Reject wallets or identities already bound elsewhere
    4. Store nonce and return message to sign
    """
    result = await orchestrator.generate_challenge(
        identity_id=request.identity_id,
        platform=request.platform,
        wallet_address=request.wallet_address,
    )
    challenge = result.unwrap()

    return ChallengeResponse(
        nonce=challenge.nonce,
        message=challenge.message,
        expires_at=challenge.expires_at,
    )


# ================================================================
# Verify Endpoint
# ================================================================


@router.post(
    "/verify",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify signed challenge",
    description="Check signature, bind wallet and issue session token",
)
async def verify_challenge(
    request: VerifyRequest,
    orchestrator: ChallengeOrchestrator = Depends(get_orchestrator),
) -> SessionResponse:
    result = await orchestrator.verify_challenge(
        nonce=request.nonce,
        signature=request.signature,
    )
    session = result.unwrap()

    return SessionResponse(
        access_token=session.token,
        identity_id=session.claims.identity_id,
        platform=session.claims.platform.value,
        wallet_address=session.claims.wallet_address,
        expires_at=session.claims.expires_at,
    )
