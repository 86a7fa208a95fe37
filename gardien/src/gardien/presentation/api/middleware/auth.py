"""
Authentication dependencies.

Chat command layers authenticate with the shared service key. End users
authenticate with the wallet session token issued after verification.
"""

import hmac
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gardien.application.services.challenge_orchestrator import (
    ChallengeOrchestrator,
)
from gardien.config.settings import Settings
from gardien.di.dependencies import get_app_settings, get_orchestrator
from gardien.domain.entities.session_claims import SessionClaims
from gardien.domain.exceptions import AuthenticationError, InvalidTokenError

# Missing header is reported through the domain handler (401), not 403
security = HTTPBearer(auto_error=False)


async def require_service_client(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Require the service key on routes that act for a chat identity.

    The identity in these requests is asserted by the caller, so only the
    chat command layers holding SERVICE_API_KEY may make them.

    Raises:
        AuthenticationError: Missing or wrong service key
    """
    if credentials is None or not hmac.compare_digest(
        credentials.credentials.encode(),
        settings.SERVICE_API_KEY.encode(),
    ):
        raise AuthenticationError("Invalid service credential")


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    orchestrator: ChallengeOrchestrator = Depends(get_orchestrator),
) -> SessionClaims:
    """
    Validate bearer token and require its binding to still exist.

    Raises:
        InvalidTokenError: Missing, malformed, forged or unlinked token
        ExpiredTokenError: Token past its expiry
    """
    if credentials is None:
        raise InvalidTokenError()

    result = await orchestrator.validate_session(
        credentials.credentials,
        require_active_binding=True,
    )
    return result.unwrap()
