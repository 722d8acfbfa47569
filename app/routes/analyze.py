"""Analyze route (project analysis)."""

from fastapi import APIRouter

from ..schemas import AnalyzeRequest, AnalyzeResponse
from ..services import checker_svc

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest) -> dict:
    """Analyze a project folder and return the JSON report (paths relative to project_root)."""
    return checker_svc.analyze_project(req)
