"""Registry self-check route."""

from fastapi import APIRouter

from ..schemas import RegistryValidationResponse
from ..services import checker_svc

router = APIRouter()


@router.get("/registry/validate", response_model=RegistryValidationResponse)
def validate_registry() -> dict:
    """Registry feature ids partitioned by membership in the Baseline dataset."""
    return checker_svc.validate_registry()
