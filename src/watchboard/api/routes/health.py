"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Report that the API process is up; the upstream sources are not probed."""
    return {"status": "ok"}
