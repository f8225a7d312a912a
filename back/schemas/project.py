
from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from database.models import Project, ProjectMember, ProjectRole

from .common import CamelSchema, as_utc
from .user import normalize_email


class CreateProjectSchema(CamelSchema):
    name: str = Field(min_length=3, max_length=120)
    description: str | None = Field(default=None, max_length=500)


class AddMemberSchema(CamelSchema):
    email: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return normalize_email(value)


class ProjectSummarySchema(CamelSchema):
    id: UUID
    name: str


class ProjectSchema(CamelSchema):
    id: UUID
    name: str
    description: str | None
    owner_id: UUID
    role: ProjectRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_db(cls, project: Project, role: ProjectRole) -> "ProjectSchema":
        return cls(id=project.id,
                   name=project.name,
                   description=project.description,
                   owner_id=project.owner_id,
                   role=role,
                   created_at=as_utc(project.created_at),
                   updated_at=as_utc(project.updated_at))


class ProjectMemberSchema(CamelSchema):
    id: UUID
    user_id: UUID
    email: str
    name: str | None
    role: ProjectRole
    joined_at: datetime

    @classmethod
    def from_db(cls, member: ProjectMember) -> "ProjectMemberSchema":
        return cls(id=member.id,
                   user_id=member.user_id,
                   email=member.user.email,
                   name=member.user.name,
                   role=ProjectRole.normalize(member.role),
                   joined_at=as_utc(member.created_at))
