"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from package_radar.interface.dependencies import get_use_case
from package_radar.interface.schemas import (
    AnalysisResponse,
    AnalyzeFilesRequest,
    AnalyzePathRequest,
    EmptyResponse,
    ErrorResponse,
)
from package_radar.services.analyze_packages import AnalyzePackagesUseCase

router = APIRouter(prefix="/analyze")

# An empty scan is answered by the NoPackagesFoundError handler, not the route.
_REPORT = AnalysisResponse | EmptyResponse

_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"description": "Package report, or status 'empty' when no packages were found"},
    422: {"model": ErrorResponse, "description": "Missing target or unsupported file type"},
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
}


@router.post("/file", response_model=_REPORT, responses=_RESPONSES)
async def analyze_file(
    body: AnalyzePathRequest,
    use_case: AnalyzePackagesUseCase = Depends(get_use_case),
) -> AnalysisResponse:
    """Analyze the packages referenced by a single source file."""
    report = await use_case.analyze_file(body.path)
    return AnalysisResponse.from_report(report)


@router.post("/directory", response_model=_REPORT, responses=_RESPONSES)
async def analyze_directory(
    body: AnalyzePathRequest,
    use_case: AnalyzePackagesUseCase = Depends(get_use_case),
) -> AnalysisResponse:
    """Analyze every JS/TS file below a project directory."""
    report = await use_case.analyze_directory(body.path)
    return AnalysisResponse.from_report(report)


@router.post("/files", response_model=_REPORT, responses=_RESPONSES)
async def analyze_files(
    body: AnalyzeFilesRequest,
    use_case: AnalyzePackagesUseCase = Depends(get_use_case),
) -> AnalysisResponse:
    """Analyze an explicit list of source files."""
    report = await use_case.analyze_files(body.paths)
    return AnalysisResponse.from_report(report)
