"""
Input validation shared by use cases.

Runs before any store access so malformed input never consumes a rate
limit attempt.
"""

from typing import Iterable, Optional

from gardien.domain.exceptions import ValidationError
from gardien.domain.value_objects.platform import Platform
from gardien.domain.value_objects.wallet_address import WalletAddress

MAX_IDENTITY_LENGTH = 128


def require_identity(identity_id: str) -> str:
    """Return stripped identity id or raise ValidationError."""
    if not isinstance(identity_id, str) or not identity_id.strip():
        raise ValidationError("identity_id", "must not be empty")

    identity_id = identity_id.strip()
    if len(identity_id) > MAX_IDENTITY_LENGTH:
        raise ValidationError(
            "identity_id", f"must be at most {MAX_IDENTITY_LENGTH} characters"
        )
    return identity_id


def require_platform(
    platform: "str | Platform",
    supported: Optional[Iterable[str]] = None,
) -> Platform:
    """Parse platform tag and check it is enabled."""
    try:
        parsed = Platform.parse(platform)
    except ValueError as e:
        raise ValidationError("platform", str(e))

    if supported is not None and parsed.value not in set(supported):
        raise ValidationError("platform", f"'{parsed.value}' is not enabled")
    return parsed


def require_wallet(wallet_address: str) -> WalletAddress:
    """Parse wallet address or raise ValidationError."""
    try:
        return WalletAddress(wallet_address)
    except ValueError:
        raise ValidationError("wallet_address", "must be a valid 0x address")
