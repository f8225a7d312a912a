
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from back.depends import (get_member_repo, get_project_repo,
                          get_provisioned_user, get_task, get_task_member,
                          get_task_repo, get_user_db, require_member)
from back.exceptions import *
from back.permissions import can_complete_task
from back.schemas import (DataResponse, TaskCreateSchema, TaskSchema,
                          TaskUpdateSchema)
from database.models import ProjectMember, Task, TaskStatus, User
from database.repositories import (UNSET, ProjectMemberRepository,
                                   ProjectRepository, TaskRepository, TaskSort)

router = APIRouter(prefix="/tasks", tags=["task"])


async def check_assignee(project_id: UUID,
                         assignee_id: UUID | None,
                         mr: ProjectMemberRepository
                         ) -> None:
    if assignee_id is None:
        return
    if await mr.get(project_id, assignee_id) is None:
        raise AssigneeNotInProjectException()


async def reread(task_id: UUID, user: User, tr: TaskRepository) -> Task:
    task = await tr.get_visible(task_id, user.id)
    if task is None:
        raise TaskNotFoundException(task_id)
    return task


@router.get("")
async def get_tasks(status: TaskStatus | None = None,
                    search: str | None = None,
                    sort: TaskSort = TaskSort.newest,
                    project_id: UUID | None = Query(default=None, alias="projectId"),
                    user: User = Depends(get_provisioned_user),
                    pr: ProjectRepository = Depends(get_project_repo),
                    mr: ProjectMemberRepository = Depends(get_member_repo),
                    tr: TaskRepository = Depends(get_task_repo)
                    ) -> DataResponse[list[TaskSchema]]:
    if project_id is not None:
        await require_member(project_id, user, pr, mr)
    tasks = await tr.get_visible_list(user.id, status=status, search=search,
                                      project_id=project_id, sort=sort)
    return DataResponse(data=[TaskSchema.from_db(task) for task in tasks])


@router.post("", status_code=201)
async def create_task(new_task: TaskCreateSchema,
                      user: User = Depends(get_user_db),
                      pr: ProjectRepository = Depends(get_project_repo),
                      mr: ProjectMemberRepository = Depends(get_member_repo),
                      tr: TaskRepository = Depends(get_task_repo)
                      ) -> DataResponse[TaskSchema]:
    await require_member(new_task.project_id, user, pr, mr)
    await check_assignee(new_task.project_id, new_task.assignee_id, mr)
    task = await tr.create(title=new_task.title,
                           description=new_task.description,
                           user_id=user.id,
                           project_id=new_task.project_id,
                           status=new_task.status,
                           due_date=new_task.due_date,
                           assignee_id=new_task.assignee_id)
    return DataResponse(data=TaskSchema.from_db(await reread(task.id, user, tr)))


@router.get("/{task_id}")
async def get_one_task(task: Task = Depends(get_task)) -> DataResponse[TaskSchema]:
    return DataResponse(data=TaskSchema.from_db(task))


@router.patch("/{task_id}")
async def update_task(task_update: TaskUpdateSchema,
                      task: Task = Depends(get_task),
                      membership: ProjectMember = Depends(get_task_member),
                      user: User = Depends(get_user_db),
                      mr: ProjectMemberRepository = Depends(get_member_repo),
                      tr: TaskRepository = Depends(get_task_repo)
                      ) -> DataResponse[TaskSchema]:
    if "project_id" in task_update.model_fields_set and task_update.project_id != task.project_id:
        raise ProjectMoveNotSupportedException()
    patch = task_update.to_patch()
    if patch.is_empty():
        raise NothingToUpdateException()
    new_status = patch.status if patch.status is not UNSET else None
    if not can_complete_task(task, membership, new_status):
        raise CompletionRequiresOwnerException()
    if patch.assignee_id is not UNSET and patch.assignee_id != task.assignee_id:
        await check_assignee(task.project_id, patch.assignee_id, mr)
    await tr.update(task, patch)
    return DataResponse(data=TaskSchema.from_db(await reread(task.id, user, tr)))


@router.delete("/{task_id}", status_code=204)
async def delete_task(task: Task = Depends(get_task),
                      tr: TaskRepository = Depends(get_task_repo)
                      ) -> Response:
    await tr.delete(task)
    return Response(status_code=204)
