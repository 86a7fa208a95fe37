"""API schemas."""

from gardien.presentation.schemas.verification_schemas import (
    BindingResponse,
    ChallengeRequest,
    ChallengeResponse,
    SessionClaimsResponse,
    SessionResponse,
    UnlinkResponse,
    VerifyRequest,
)

__all__ = [
    "ChallengeRequest",
    "ChallengeResponse",
    "VerifyRequest",
    "SessionResponse",
    "BindingResponse",
    "UnlinkResponse",
    "SessionClaimsResponse",
]
