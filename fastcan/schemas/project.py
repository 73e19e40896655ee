"""Project schemas."""

from pydantic import BaseModel, Field

from .common import BaseResponse

__all__ = ["TaskResponse", "ProjectResponse", "ProjectDetailResponse", "ProjectListResponse"]


class TaskResponse(BaseModel):
    """Task as returned by the API."""

    model_config = {"from_attributes": True}

    id: int
    title: str
    assignee_id: int | None = None


class ProjectResponse(BaseModel):
    """Project as returned by the API."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    owner_id: int | None = None
    status: str
    is_public: bool
    budget: float | None = None
    tasks: list[TaskResponse] = Field(default_factory=list)


class ProjectDetailResponse(BaseResponse):
    """Single project response."""

    project: ProjectResponse


class ProjectListResponse(BaseResponse):
    """Project collection response."""

    projects: list[ProjectResponse]
    total: int
