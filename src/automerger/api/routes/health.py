"""Health check endpoint."""

from fastapi import APIRouter

from automerger.api.models import APIResponse, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=APIResponse[HealthResponse])
def health() -> APIResponse[HealthResponse]:
    """Report that the server is up."""
    return APIResponse(data=HealthResponse())
