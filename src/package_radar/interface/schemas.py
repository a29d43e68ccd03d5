"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from package_radar.domain.entities import AnalysisReport, TreeNode


def _not_blank(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        msg = "path must not be empty."
        raise ValueError(msg)
    return stripped


class AnalyzePathRequest(BaseModel):
    """Request body for ``POST /analyze/file`` and ``POST /analyze/directory``."""

    path: str

    @field_validator("path")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v)


class AnalyzeFilesRequest(BaseModel):
    """Request body for ``POST /analyze/files``."""

    paths: list[str] = Field(min_length=1)

    @field_validator("paths")
    @classmethod
    def _each_must_not_be_blank(cls, v: list[str]) -> list[str]:
        return [_not_blank(p) for p in v]


class TreeNodeSchema(BaseModel):
    type: str
    name: str
    path: str
    children: list[TreeNodeSchema] = []

    @classmethod
    def from_node(cls, node: TreeNode) -> TreeNodeSchema:
        return cls(
            type=node.type.value,
            name=node.name,
            path=node.path,
            children=[cls.from_node(child) for child in node.children],
        )


class PackageSchema(BaseModel):
    """One package row: usage in the project plus registry metadata."""

    name: str
    count: int
    files: list[str]
    description: str
    version: str
    license: str
    homepage: str
    repository: str
    maintainers: int
    last_published: str
    dependencies: dict[str, str]
    weekly_downloads: int
    alternatives: list[str]
    error: str | None = None


class AnalysisResponse(BaseModel):
    """Successful response from the ``/analyze`` endpoints."""

    status: str = "ok"
    files_analyzed: int
    packages_found: int
    structure: list[TreeNodeSchema]
    package_imports: dict[str, list[str]]
    suggested_analysis: list[str]
    packages: list[PackageSchema]

    @classmethod
    def from_report(cls, report: AnalysisReport) -> AnalysisResponse:
        return cls(
            files_analyzed=report.files_analyzed,
            packages_found=report.packages_found,
            structure=[TreeNodeSchema.from_node(node) for node in report.tree],
            package_imports={
                path: sorted(pkgs) for path, pkgs in report.package_imports.items()
            },
            suggested_analysis=list(report.suggested_analysis),
            packages=[
                PackageSchema(
                    name=row.metadata.name,
                    count=row.usage.count,
                    files=list(row.usage.files),
                    description=row.metadata.description,
                    version=row.metadata.version,
                    license=row.metadata.license,
                    homepage=row.metadata.homepage,
                    repository=row.metadata.repository,
                    maintainers=row.metadata.maintainers,
                    last_published=row.metadata.last_published,
                    dependencies=dict(row.metadata.dependencies),
                    weekly_downloads=row.metadata.weekly_downloads,
                    alternatives=list(row.metadata.alternatives),
                    error=row.metadata.error,
                )
                for row in report.packages
            ],
        )


class EmptyResponse(BaseModel):
    """Returned when the scan found no registry packages."""

    status: str = "empty"
    message: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
