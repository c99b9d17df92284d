"""
Project endpoints - a learner's saved strategy projects.
"""

import uuid
from typing import List

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import and_, select

from tsea.api.deps import CurrentUser, DbSession
from tsea.kernel.models.project import Project
from tsea.kernel.models.user import User
from tsea.logging_config import get_logger
from tsea.schemas.common import SuccessResponse
from tsea.schemas.project import ProjectCreate, ProjectResponse

logger = get_logger(__name__)
router = APIRouter()


async def _get_owned_project(db, user: User, project_id: uuid.UUID) -> Project:
    result = await db.execute(
        select(Project).where(
            and_(
                Project.id == project_id,
                Project.owner_id == user.id,
            )
        )
    )
    project = result.scalar_one_or_none()
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return project


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(data: ProjectCreate, user: CurrentUser, db: DbSession):
    """Create a new project."""
    project = Project(
        name=data.name.strip(),
        description=data.description,
        owner_id=user.id,
    )
    db.add(project)
    await db.flush()
    await db.refresh(project)
    logger.info("Project created", extra={"project_id": str(project.id), "user_id": str(user.id)})
    return ProjectResponse.model_validate(project)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """List the current user's projects, newest first."""
    result = await db.execute(
        select(Project)
        .where(Project.owner_id == user.id)
        .order_by(Project.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    return [ProjectResponse.model_validate(p) for p in result.scalars().all()]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: uuid.UUID, user: CurrentUser, db: DbSession):
    project = await _get_owned_project(db, user, project_id)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", response_model=SuccessResponse)
async def delete_project(project_id: uuid.UUID, user: CurrentUser, db: DbSession):
    project = await _get_owned_project(db, user, project_id)
    await db.delete(project)
    await db.flush()
    logger.info("Project deleted", extra={"project_id": str(project_id), "user_id": str(user.id)})
    return SuccessResponse(message="Project deleted")
