
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import ProjectMember, ProjectRole, utc_now


class ProjectMemberRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, project_id: UUID, user_id: UUID) -> ProjectMember | None:
        stmt = select(ProjectMember).where(ProjectMember.project_id == project_id,
                                           ProjectMember.user_id == user_id).limit(1)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def get_by_project(self, project_id: UUID) -> list[ProjectMember]:
        stmt = select(ProjectMember).where(ProjectMember.project_id == project_id) \
            .order_by(ProjectMember.created_at.asc())
        return list((await self.session.execute(stmt)).scalars().all())

    async def create(self, project_id: UUID, user_id: UUID,
                     role: ProjectRole = ProjectRole.member) -> ProjectMember:
        member = ProjectMember(project_id=project_id,
                               user_id=user_id,
                               role=role.value,
                               created_at=utc_now())
        self.session.add(member)
        await self.session.commit()
        await self.session.refresh(member, ["user"])
        return member

    async def delete(self, member: ProjectMember) -> None:
        await self.session.delete(member)
        await self.session.commit()
