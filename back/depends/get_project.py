
from uuid import UUID

from fastapi import Depends

from back.exceptions import (OwnerRequiredException,
                             ProjectAccessDeniedException,
                             ProjectNotFoundException)
from back.permissions import can_manage_project
from database.models import Project, ProjectMember, User
from database.repositories import ProjectMemberRepository, ProjectRepository

from .database import get_member_repo, get_project_repo
from .get_user import get_user_db


async def get_project(project_id: UUID,
                      pr: ProjectRepository = Depends(get_project_repo)
                      ) -> Project:
    project = await pr.get_by_id(project_id)
    if project is None:
        raise ProjectNotFoundException(project_id)
    return project


async def require_member(project_id: UUID,
                         user: User,
                         pr: ProjectRepository,
                         mr: ProjectMemberRepository
                         ) -> ProjectMember:
    if await pr.get_by_id(project_id) is None:
        raise ProjectNotFoundException(project_id)
    membership = await mr.get(project_id, user.id)
    if membership is None:
        raise ProjectAccessDeniedException()
    return membership


async def require_owner(project_id: UUID,
                        user: User,
                        pr: ProjectRepository,
                        mr: ProjectMemberRepository
                        ) -> ProjectMember:
    membership = await require_member(project_id, user, pr, mr)
    if not can_manage_project(membership):
        raise OwnerRequiredException()
    return membership


async def get_project_member(project: Project = Depends(get_project),
                             user: User = Depends(get_user_db),
                             pr: ProjectRepository = Depends(get_project_repo),
                             mr: ProjectMemberRepository = Depends(get_member_repo)
                             ) -> ProjectMember:
    return await require_member(project.id, user, pr, mr)


async def get_project_owner(project: Project = Depends(get_project),
                            user: User = Depends(get_user_db),
                            pr: ProjectRepository = Depends(get_project_repo),
                            mr: ProjectMemberRepository = Depends(get_member_repo)
                            ) -> ProjectMember:
    return await require_owner(project.id, user, pr, mr)
