"""
Resolution Endpoints
====================
HTTP surface through which an IDE client resolves execution-root paths.

Routes:
    GET  /project                       — current project data (404 if none)
    PUT  /project                       — replace the project data snapshot; a
                                          missing build_system is detected from
                                          the workspace marker files
    GET  /execution-root                — configured execution root
    POST /resolve                       — resolve one file path
    POST /resolve/include-directories   — resolve a directory to all its roots

A fresh resolver is built from the current snapshot on each request, so a
PUT /project takes effect immediately and never mixes configurations within
one call. Without project data, resolution routes answer 503.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from ide_sync.sync.execution_root_path_resolver import ExecutionRootPathResolver, PathKind
from ide_sync.sync.project_data import ProjectData, ProjectDataManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Resolve"])

_project_data_manager = ProjectDataManager()


def get_project_data_manager() -> ProjectDataManager:
    return _project_data_manager


def get_resolver(
    manager: ProjectDataManager = Depends(get_project_data_manager),
) -> ExecutionRootPathResolver:
    resolver = ExecutionRootPathResolver.from_project(manager)
    if resolver is None:
        raise HTTPException(status_code=503, detail="No project data — sync the project first")
    return resolver


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------
class ResolveRequest(BaseModel):
    path: str

    @field_validator("path")
    @classmethod
    def path_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("path must not be empty")
        return v


class ResolveResponse(BaseModel):
    path: str
    kind: PathKind
    resolved: str


class IncludeDirectoriesResponse(BaseModel):
    path: str
    kind: PathKind
    directories: List[str]


class ExecutionRootResponse(BaseModel):
    execution_root: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
@router.get("/project", response_model=ProjectData)
async def get_project(manager: ProjectDataManager = Depends(get_project_data_manager)):
    project_data = manager.get_project_data()
    if project_data is None:
        raise HTTPException(status_code=404, detail="No project data")
    return project_data


@router.put("/project", response_model=ProjectData)
async def put_project(
    project_data: ProjectData,
    manager: ProjectDataManager = Depends(get_project_data_manager),
):
    project_data = project_data.with_detected_build_system()
    manager.set_project_data(project_data)
    return project_data


@router.get("/execution-root", response_model=ExecutionRootResponse)
async def get_execution_root(resolver: ExecutionRootPathResolver = Depends(get_resolver)):
    return ExecutionRootResponse(execution_root=str(resolver.get_execution_root()))


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_path(
    request: ResolveRequest,
    resolver: ExecutionRootPathResolver = Depends(get_resolver),
):
    kind = resolver.classify(request.path)
    resolved = resolver.resolve_execution_root_path(request.path)
    logger.debug("Resolved %s (%s) → %s", request.path, kind.value, resolved)
    return ResolveResponse(path=request.path, kind=kind, resolved=str(resolved))


@router.post("/resolve/include-directories", response_model=IncludeDirectoriesResponse)
async def resolve_include_directories(
    request: ResolveRequest,
    resolver: ExecutionRootPathResolver = Depends(get_resolver),
):
    kind = resolver.classify(request.path)
    directories = resolver.resolve_to_include_directories(request.path)
    return IncludeDirectoriesResponse(
        path=request.path,
        kind=kind,
        directories=[str(d) for d in directories],
    )
