"""Pydantic request/response models."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


# --- Request ---


class PolicyFields(BaseModel):
    """Run policy; unset fields fall back to the environment defaults."""

    target: Optional[Union[int, str]] = Field(default=None, description="'widely', 'newly' or a year")
    strict: Optional[bool] = Field(default=None, description="Escalate severities")
    allow: Optional[List[str]] = Field(default=None, description="Feature ids exempt from diagnostics")


class CheckRequest(PolicyFields):
    """Request body for single-file checks."""

    code: str = Field(..., description="Source text to analyze")
    filename: str = Field(..., description="File name; its extension selects the analyzer")


class AnalyzeRequest(PolicyFields):
    """Request body for project analysis."""

    project_root: str = Field(..., description="Absolute path to the project folder on the server")
    files: Optional[List[str]] = Field(default=None, description="Explicit files (relative to project_root)")
    patterns: Optional[List[str]] = Field(default=None, description="Glob patterns relative to project_root")
    max_file_size: Optional[int] = Field(default=None, gt=0, description="Skip files larger than this (bytes)")
    max_concurrency: Optional[int] = Field(default=None, gt=0, description="Worker threads")


# --- Records (response) ---


class PositionOut(BaseModel):
    line: int
    col: int


class RangeOut(BaseModel):
    start: PositionOut
    end: PositionOut


class SuggestionOut(BaseModel):
    title: str
    code: Optional[str] = None
    note: Optional[str] = None


class EvidenceOut(BaseModel):
    """Single detected feature usage."""

    file: str
    lang: str = Field(..., description="script, markup or stylesheet")
    range: RangeOut
    code: str
    featureId: str
    meta: Dict[str, Any] = Field(default_factory=dict)


class DiagnosticOut(BaseModel):
    """Single compatibility finding."""

    severity: str = Field(..., description="error, warn or info")
    message: str
    featureId: str
    baseline: str = Field(..., description="widely, newly, limited or unknown")
    file: str
    range: RangeOut
    suggestions: List[SuggestionOut] = Field(default_factory=list)


class SummaryOut(BaseModel):
    total: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0


class ConfigOut(BaseModel):
    target: Union[int, str]
    strict: bool
    allow: List[str] = Field(default_factory=list)


# --- Responses ---


class CheckResponse(BaseModel):
    """Response for POST /check."""

    summary: SummaryOut
    config: ConfigOut
    evidence: List[EvidenceOut] = Field(default_factory=list)
    diagnostics: List[DiagnosticOut] = Field(default_factory=list)


class AnalyzeResponse(CheckResponse):
    """Response for POST /analyze: the JSON report."""

    timestamp: str
    version: str


class RegistryValidationResponse(BaseModel):
    """Registry ids partitioned by dataset membership."""

    valid: List[str] = Field(default_factory=list)
    invalid: List[str] = Field(default_factory=list)
