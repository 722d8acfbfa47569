"""Health check route."""

from fastapi import APIRouter

from baseline_checker import __version__

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Liveness check."""
    return {"status": "ok", "version": __version__}
