
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.models.base import Base, utc_now
from database.models.project import Project
from database.models.user import User


class ProjectRole(str, Enum):
    owner = "owner"
    member = "member"

    @classmethod
    def normalize(cls, value: str | None) -> "ProjectRole":
        return cls.owner if value == cls.owner.value else cls.member


class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    project_id: Mapped[UUID] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"))
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    role: Mapped[str] = mapped_column(String(16), default=ProjectRole.member.value)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    project: Mapped[Project] = relationship(lazy="selectin", foreign_keys=[project_id])
    user: Mapped[User] = relationship(lazy="selectin", foreign_keys=[user_id])

    @property
    def is_owner(self) -> bool:
        return ProjectRole.normalize(self.role) is ProjectRole.owner
