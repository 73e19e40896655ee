"""Pydantic schemas for request/response models."""

from .common import *
from .project import *

__all__ = [
    # Common
    "BaseResponse",
    # Project
    "TaskResponse",
    "ProjectResponse",
    "ProjectDetailResponse",
    "ProjectListResponse",
]
