
from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, Field, field_validator, model_validator

from database.models import Task, TaskStatus
from database.repositories import UNSET, TaskPatch

from .common import CamelSchema, as_utc, to_naive_utc
from .project import ProjectSummarySchema
from .user import UserSchema


def check_due_date_input(value: object) -> object:
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("dueDate must be an ISO-8601 timestamp with an offset")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
    if parsed is None or parsed.tzinfo is None:
        raise ValueError("dueDate must be an ISO-8601 timestamp with an offset")
    return value


class TaskCreateSchema(CamelSchema):
    title: str = Field(min_length=3, max_length=120)
    description: str = Field(min_length=1, max_length=2000)
    status: TaskStatus = TaskStatus.todo
    project_id: UUID
    due_date: AwareDatetime | None = None
    assignee_id: UUID | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def require_iso_string(cls, value: object) -> object:
        return check_due_date_input(value)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class TaskUpdateSchema(CamelSchema):
    """PATCH body. A field left out of the body keeps its value; an explicit
    null clears it (dueDate, assigneeId only)."""

    title: str | None = Field(default=None, min_length=3, max_length=120)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    status: TaskStatus | None = None
    project_id: UUID | None = None
    due_date: AwareDatetime | None = None
    assignee_id: UUID | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def require_iso_string(cls, value: object) -> object:
        return check_due_date_input(value)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "TaskUpdateSchema":
        for name in ("title", "description", "status", "project_id"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_patch(self) -> TaskPatch:
        fields = self.model_fields_set
        return TaskPatch(
            title=self.title if "title" in fields else UNSET,
            description=self.description if "description" in fields else UNSET,
            status=self.status if "status" in fields else UNSET,
            due_date=self.due_date if "due_date" in fields else UNSET,
            assignee_id=self.assignee_id if "assignee_id" in fields else UNSET,
        )


class TaskSchema(CamelSchema):
    id: UUID
    title: str
    description: str
    status: TaskStatus
    created_by: UUID | None
    project_id: UUID | None
    project: ProjectSummarySchema | None
    assignee_id: UUID | None
    assignee: UserSchema | None
    due_date: datetime | None
    completed_at: datetime | None
    reminder_sent_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_db(cls, task: Task) -> "TaskSchema":
        return cls(id=task.id,
                   title=task.title,
                   description=task.description,
                   status=TaskStatus(task.status),
                   created_by=task.user_id,
                   project_id=task.project_id,
                   project=ProjectSummarySchema(id=task.project.id, name=task.project.name)
                   if task.project else None,
                   assignee_id=task.assignee_id,
                   assignee=UserSchema.from_db(task.assignee) if task.assignee else None,
                   due_date=as_utc(task.due_date),
                   completed_at=as_utc(task.completed_at),
                   reminder_sent_at=as_utc(task.reminder_sent_at),
                   created_at=as_utc(task.created_at),
                   updated_at=as_utc(task.updated_at))
