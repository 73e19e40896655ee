"""Project routes authorized through declared abilities."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from fastcan.constants import ALL
from fastcan.decorators.permissions import require_ability
from fastcan.dependencies.ability import authorize, load_and_authorize
from fastcan.dependencies.database import get_db
from fastcan.models.project import Project
from fastcan.schemas.project import ProjectDetailResponse, ProjectListResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=ProjectListResponse)
async def list_projects(projects: list[Project] = Depends(load_and_authorize(Project))):
    """List the projects the caller may list."""

    return ProjectListResponse(
        message="Projects retrieved successfully",
        projects=projects,
        total=len(projects),
    )


@router.get(
    "/admin/summary",
    dependencies=[Depends(authorize("admin", ALL))],
)
async def admin_summary():
    """Administrative summary, for callers who may administer everything."""

    return {"success": True, "message": "Admin access granted"}


@router.get("/reports/ownership")
@require_ability("report", Project)
async def ownership_report(request: Request):
    """Ownership report, for callers who may report on projects."""

    return {"success": True, "message": "Report access granted"}


@router.get("/{id}", response_model=ProjectDetailResponse)
async def get_project(project: Project = Depends(load_and_authorize(Project))):
    """Get a project by ID."""

    return ProjectDetailResponse(message="Project retrieved successfully", project=project)


@router.post("/", response_model=ProjectDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: Project = Depends(load_and_authorize(Project)),
    db: AsyncSession = Depends(get_db),
):
    """Create a project from the submitted ``project`` fields."""

    db.add(project)
    await db.commit()
    await db.refresh(project)

    logger.info(
        f"Created project {project.id}",
        extra={"project_id": project.id, "owner_id": project.owner_id},
    )

    return ProjectDetailResponse(message="Project created successfully", project=project)


@router.put("/{id}", response_model=ProjectDetailResponse)
@router.patch("/{id}", response_model=ProjectDetailResponse)
async def update_project(
    project: Project = Depends(load_and_authorize(Project)),
    db: AsyncSession = Depends(get_db),
):
    """Update a project with the submitted ``project`` fields."""

    await db.commit()
    await db.refresh(project)

    return ProjectDetailResponse(message="Project updated successfully", project=project)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project: Project = Depends(load_and_authorize(Project)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project."""

    await db.delete(project)
    await db.commit()

    logger.info(f"Deleted project {project.id}", extra={"project_id": project.id})

    return Response(status_code=status.HTTP_204_NO_CONTENT)
