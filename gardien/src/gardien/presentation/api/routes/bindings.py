"""
Wallet binding API routes.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from gardien.application.services.challenge_orchestrator import (
    ChallengeOrchestrator,
)
from gardien.di.dependencies import get_orchestrator
from gardien.presentation.api.middleware.auth import require_service_client
from gardien.presentation.schemas.verification_schemas import (
    BindingResponse,
    UnlinkResponse,
)

router = APIRouter(
    prefix="/bindings",
    tags=["Bindings"],
    dependencies=[Depends(require_service_client)],
)


@router.get(
    "/{platform}/{identity_id}",
    response_model=BindingResponse,
    summary="Get wallet bound to identity",
)
async def get_binding(
    platform: str,
    identity_id: str,
    orchestrator: ChallengeOrchestrator = Depends(get_orchestrator),
) -> BindingResponse:
    binding = (await orchestrator.get_binding(identity_id, platform)).unwrap()
    if binding is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No wallet linked to this account",
        )

    return BindingResponse(
        identity_id=binding.identity_id,
        platform=binding.platform.value,
        wallet_address=binding.wallet_address,
        bound_at=binding.bound_at,
    )


@router.delete(
    "/{platform}/{identity_id}",
    response_model=UnlinkResponse,
    summary="Unlink wallet from identity",
)
async def unlink_wallet(
    platform: str,
    identity_id: str,
    orchestrator: ChallengeOrchestrator = Depends(get_orchestrator),
) -> UnlinkResponse:
    result = (await orchestrator.unlink_wallet(identity_id, platform)).unwrap()
    return UnlinkResponse(
        unlinked=result.unlinked,
        wallet_address=result.wallet_address,
    )
