
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import ProjectMember, Task, TaskStatus, utc_now


class _Unset(Enum):
    token = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.token


@dataclass(frozen=True)
class TaskPatch:
    """Partial task update.

    Each field is UNSET (leave as is), None (clear, nullable fields only)
    or a value to store.
    """

    title: str | _Unset = UNSET
    description: str | _Unset = UNSET
    status: TaskStatus | _Unset = UNSET
    due_date: datetime | None | _Unset = UNSET
    assignee_id: UUID | None | _Unset = UNSET

    def is_set(self, field: str) -> bool:
        return getattr(self, field) is not UNSET

    def is_empty(self) -> bool:
        return not any(self.is_set(name) for name in self.__dataclass_fields__)


def escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TaskSort(str, Enum):
    newest = "newest"
    oldest = "oldest"
    title = "title"


_ORDER_BY = {
    TaskSort.newest: (Task.created_at.desc(),),
    TaskSort.oldest: (Task.created_at.asc(),),
    TaskSort.title: (Task.title.asc(), Task.created_at.desc()),
}


class TaskRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _visible_to(user_id: UUID) -> Any:
        member_projects = select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
        return or_(Task.user_id == user_id,
                   Task.assignee_id == user_id,
                   Task.project_id.in_(member_projects))

    async def get_by_id(self, task_id: UUID) -> Task | None:
        return await self.session.get(Task, task_id, populate_existing=True)

    async def get_visible(self, task_id: UUID, user_id: UUID) -> Task | None:
        stmt = select(Task).where(Task.id == task_id, self._visible_to(user_id)) \
            .execution_options(populate_existing=True)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def get_visible_list(self,
                               user_id: UUID,
                               status: TaskStatus | None = None,
                               search: str | None = None,
                               project_id: UUID | None = None,
                               sort: TaskSort = TaskSort.newest
                               ) -> list[Task]:
        stmt = select(Task).where(self._visible_to(user_id))
        if status is not None:
            stmt = stmt.where(Task.status == status.value)
        if search is not None and search.strip():
            pattern = f"%{escape_like(search.strip())}%"
            stmt = stmt.where(or_(Task.title.ilike(pattern, escape="\\"),
                                  Task.description.ilike(pattern, escape="\\")))
        if project_id is not None:
            stmt = stmt.where(Task.project_id == project_id)
        stmt = stmt.order_by(*_ORDER_BY[sort])
        return list((await self.session.execute(stmt)).scalars().all())

    async def create(self,
                     title: str,
                     description: str,
                     user_id: UUID,
                     project_id: UUID,
                     status: TaskStatus = TaskStatus.todo,
                     due_date: datetime | None = None,
                     assignee_id: UUID | None = None
                     ) -> Task:
        now = utc_now()
        task = Task(title=title,
                    description=description,
                    status=status.value,
                    user_id=user_id,
                    project_id=project_id,
                    assignee_id=assignee_id,
                    due_date=due_date,
                    completed_at=now if status is TaskStatus.done else None,
                    created_at=now,
                    updated_at=now)
        self.session.add(task)
        await self.session.commit()
        await self.session.refresh(task)
        return task

    async def update(self, task: Task, patch: TaskPatch, now: datetime | None = None) -> None:
        now = now or utc_now()
        if patch.title is not UNSET:
            task.title = patch.title
        if patch.description is not UNSET:
            task.description = patch.description
        if patch.status is not UNSET:
            task.status = patch.status.value
        if patch.due_date is not UNSET and patch.due_date != task.due_date:
            task.due_date = patch.due_date
            task.reminder_sent_at = None
        if patch.assignee_id is not UNSET and patch.assignee_id != task.assignee_id:
            task.assignee_id = patch.assignee_id
            task.reminder_sent_at = None

        if task.status == TaskStatus.done.value:
            if task.completed_at is None:
                task.completed_at = now
        else:
            task.completed_at = None
        task.updated_at = now
        await self.session.commit()
        await self.session.refresh(task)

    async def delete(self, task: Task) -> None:
        await self.session.delete(task)
        await self.session.commit()

    async def count_open_by_assignee(self, project_id: UUID, user_id: UUID) -> int:
        stmt = select(func.count()).select_from(Task).where(Task.project_id == project_id,
                                                            Task.assignee_id == user_id,
                                                            Task.status != TaskStatus.done.value)
        return int((await self.session.execute(stmt)).scalar_one())

    async def get_reminder_candidates(self, window_start: datetime, window_end: datetime) -> list[Task]:
        """Assigned, open, not yet reminded tasks due in [window_start, window_end)."""
        stmt = select(Task).where(Task.assignee_id.is_not(None),
                                  Task.project_id.is_not(None),
                                  Task.due_date.is_not(None),
                                  Task.reminder_sent_at.is_(None),
                                  Task.completed_at.is_(None),
                                  Task.status != TaskStatus.done.value,
                                  Task.due_date >= window_start,
                                  Task.due_date < window_end) \
            .order_by(Task.due_date.asc())
        return list((await self.session.execute(stmt)).scalars().all())

    async def mark_reminder_sent(self, task_id: UUID, sent_at: datetime) -> None:
        await self.session.execute(
            update(Task).where(Task.id == task_id).values(reminder_sent_at=sent_at)
        )
        await self.session.commit()
