
from uuid import UUID

from fastapi import Depends

from back.exceptions import ProjectAccessDeniedException, TaskNotFoundException
from back.permissions import can_mutate_task
from database.models import ProjectMember, Task, User
from database.repositories import ProjectMemberRepository, TaskRepository

from .database import get_member_repo, get_task_repo
from .get_user import get_user_db


async def get_task(task_id: UUID,
                   user: User = Depends(get_user_db),
                   tr: TaskRepository = Depends(get_task_repo)
                   ) -> Task:
    task = await tr.get_visible(task_id, user.id)
    if task is None:
        raise TaskNotFoundException(task_id)
    return task


async def get_task_member(task: Task = Depends(get_task),
                          user: User = Depends(get_user_db),
                          mr: ProjectMemberRepository = Depends(get_member_repo)
                          ) -> ProjectMember:
    membership = None
    if task.project_id is not None:
        membership = await mr.get(task.project_id, user.id)
    if not can_mutate_task(task, membership):
        raise ProjectAccessDeniedException()
    return membership
