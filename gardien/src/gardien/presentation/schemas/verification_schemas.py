"""
Verification API schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# ================================================================
# Challenge Schemas
# ================================================================


class ChallengeRequest(BaseModel):
    """Request a verification challenge."""

    identity_id: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User id on the chat platform",
    )
    platform: str = Field(..., description="Chat platform (discord, telegram)")
    wallet_address: str = Field(..., description="0x wallet address to verify")


class ChallengeResponse(BaseModel):
    """Challenge to sign out of band."""

    nonce: str = Field(..., description="Single-use challenge nonce")
    message: str = Field(..., description="Exact text to sign (personal_sign)")
    expires_at: int = Field(..., description="Expiry in unix milliseconds")


# ================================================================
# Verify Schemas
# ================================================================


class VerifyRequest(BaseModel):
    """Submit a signed challenge."""

    nonce: str = Field(..., min_length=1, description="Challenge nonce")
    signature: str = Field(..., min_length=1, description="Hex signature")


class SessionResponse(BaseModel):
    """Session issued after successful verification."""

    access_token: str = Field(..., description="Wallet session token")
    token_type: str = Field(default="bearer")
    identity_id: str
    platform: str
    wallet_address: str
    expires_at: datetime


# ================================================================
# Binding Schemas
# ================================================================


class BindingResponse(BaseModel):
    """Current identity to wallet binding."""

    identity_id: str
    platform: str
    wallet_address: str
    bound_at: datetime


class UnlinkResponse(BaseModel):
    """Unlink outcome."""

    unlinked: bool
    wallet_address: Optional[str] = None


# ================================================================
# Session Schemas
# ================================================================


class SessionClaimsResponse(BaseModel):
    """Claims of a validated session token."""

    identity_id: str
    platform: str
    wallet_address: str
    issued_at: datetime
    expires_at: datetime
