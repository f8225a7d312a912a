
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database.database import session_manager
from database.repositories import (ProjectMemberRepository, ProjectRepository,
                                   TaskRepository, UserRepository)


async def get_user_repo(session: AsyncSession = Depends(session_manager.session)
                        ) -> UserRepository:
    return UserRepository(session)


async def get_project_repo(session: AsyncSession = Depends(session_manager.session)
                           ) -> ProjectRepository:
    return ProjectRepository(session)


async def get_member_repo(session: AsyncSession = Depends(session_manager.session)
                          ) -> ProjectMemberRepository:
    return ProjectMemberRepository(session)


async def get_task_repo(session: AsyncSession = Depends(session_manager.session)
                        ) -> TaskRepository:
    return TaskRepository(session)
