
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.models.base import Base, utc_now
from database.models.project import Project
from database.models.user import User


class TaskStatus(str, Enum):
    todo = "TODO"
    in_progress = "IN_PROGRESS"
    done = "DONE"


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(120))
    description: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(16), default=TaskStatus.todo.value, index=True)
    # legacy rows may have no project; new tasks always carry one
    user_id: Mapped[UUID | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)
    project_id: Mapped[UUID | None] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), index=True)
    assignee_id: Mapped[UUID | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)
    due_date: Mapped[datetime | None] = mapped_column(index=True)
    completed_at: Mapped[datetime | None]
    reminder_sent_at: Mapped[datetime | None]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now)

    project: Mapped[Project | None] = relationship(lazy="selectin", foreign_keys=[project_id])
    assignee: Mapped[User | None] = relationship(lazy="selectin", foreign_keys=[assignee_id])
