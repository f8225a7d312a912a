
"""
Access decisions for projects and tasks.

Pure functions over already-loaded rows. They never touch the database, so
callers fetch the membership first and then ask.

- visibility: creator, assignee or any member of the task's project
  (in-memory form of `TaskRepository._visible_to`, which applies the same
  rule in SQL for listing and lookups)
- mutation: membership in the task's project
- completion (moving a task into DONE): project owner only
- project management (members, deletion): project owner only
"""

from uuid import UUID

from database.models import ProjectMember, Task, TaskStatus


def is_owner(membership: ProjectMember | None) -> bool:
    return membership is not None and membership.is_owner


def can_view_task(task: Task, user_id: UUID, membership: ProjectMember | None) -> bool:
    if task.user_id == user_id or task.assignee_id == user_id:
        return True
    return membership is not None and membership.project_id == task.project_id


def can_mutate_task(task: Task, membership: ProjectMember | None) -> bool:
    return membership is not None \
        and task.project_id is not None \
        and membership.project_id == task.project_id


def is_transition_to_done(task: Task, new_status: TaskStatus | None) -> bool:
    return new_status is TaskStatus.done and task.status != TaskStatus.done.value


def can_complete_task(task: Task, membership: ProjectMember | None, new_status: TaskStatus | None) -> bool:
    if not is_transition_to_done(task, new_status):
        return True
    return can_mutate_task(task, membership) and is_owner(membership)


def can_manage_project(membership: ProjectMember | None) -> bool:
    return is_owner(membership)
