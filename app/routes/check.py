"""Check route (single-file analysis)."""

from fastapi import APIRouter

from ..schemas import CheckRequest, CheckResponse
from ..services import checker_svc

router = APIRouter()


@router.post("/check", response_model=CheckResponse)
def check(req: CheckRequest) -> dict:
    """Evidence and diagnostics for one file, dispatched by the filename's extension."""
    return checker_svc.check_code(req)
