"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from gardien.domain.exceptions import GardienException, RateLimitExceededError

STATUS_CODE_MAP = {
    "VALIDATION_ERROR": 422,
    "RATE_LIMIT_EXCEEDED": status.HTTP_429_TOO_MANY_REQUESTS,
    "WALLET_ALREADY_BOUND": status.HTTP_409_CONFLICT,
    "NONCE_EXPIRED_OR_INVALID": status.HTTP_400_BAD_REQUEST,
    "SIGNATURE_MISMATCH": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def gardien_exception_handler(
    request: Request, exc: GardienException
) -> JSONResponse:
    """
    Handle Gardien domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    headers = {}
    if isinstance(exc, RateLimitExceededError):
        headers["Retry-After"] = str(exc.retry_after)
    elif status_code == status.HTTP_401_UNAUTHORIZED:
        headers["WWW-Authenticate"] = "Bearer"

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        },
        headers=headers or None,
    )
