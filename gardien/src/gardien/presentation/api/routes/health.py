"""
Health check API routes.

Kubernetes-compatible liveness and readiness probes.
"""

from fastapi import APIRouter, Response, status

from gardien.di.container import get_container

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """Liveness probe: process is up."""
    return {"status": "healthy"}


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_probe(response: Response):
    """
    Readiness probe endpoint.

    Returns 503 while any backing store is unreachable.
    """
    components = await get_container().health()
    healthy = all(components.values())

    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if healthy else "degraded",
        "components": {
            name: "healthy" if ok else "unhealthy" for name, ok in components.items()
        },
    }


@router.get("", status_code=status.HTTP_200_OK)
async def health_check_endpoint(response: Response):
    """General health check endpoint (alias for readiness)."""
    return await readiness_probe(response)
