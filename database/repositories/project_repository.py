
import logging
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import (Project, ProjectMember, ProjectRole, Task, User,
                             utc_now)

logger = logging.getLogger(__name__)


class ProjectRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, project_id: UUID) -> Project | None:
        return await self.session.get(Project, project_id)

    async def get_by_user(self, user: User) -> list[tuple[Project, ProjectRole]]:
        """Projects the user belongs to, newest first, with the user's role."""
        stmt = select(Project, ProjectMember.role) \
            .join(ProjectMember, ProjectMember.project_id == Project.id) \
            .where(ProjectMember.user_id == user.id) \
            .order_by(Project.created_at.desc())
        rows = (await self.session.execute(stmt)).all()
        return [(project, ProjectRole.normalize(role)) for project, role in rows]

    async def create(self, holder: User, name: str, description: str | None) -> Project:
        """Insert the project and its owner membership as one transaction."""
        now = utc_now()
        project = Project(name=name.strip(),
                          description=description.strip() if description else None,
                          owner_id=holder.id,
                          created_at=now,
                          updated_at=now)
        try:
            self.session.add(project)
            await self.session.flush()
            await self._add_owner(project, holder)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return project

    async def _add_owner(self, project: Project, holder: User) -> None:
        self.session.add(ProjectMember(project_id=project.id,
                                       user_id=holder.id,
                                       role=ProjectRole.owner.value,
                                       created_at=project.created_at))
        await self.session.flush()

    async def delete(self, project: Project) -> None:
        await self.session.execute(delete(Task).where(Task.project_id == project.id))
        await self.session.execute(delete(ProjectMember).where(ProjectMember.project_id == project.id))
        await self.session.delete(project)
        await self.session.commit()

    async def ensure_baseline(self, user: User, name: str, description: str) -> UUID:
        """Give a user without memberships a personal project and adopt their
        ownerless tasks into their first project. Safe to call repeatedly."""
        stmt = select(ProjectMember.project_id).where(ProjectMember.user_id == user.id) \
            .order_by(ProjectMember.created_at.asc()).limit(1)
        anchor_project_id = (await self.session.execute(stmt)).scalar_one_or_none()
        if anchor_project_id is None:
            project = await self.create(user, name, description)
            anchor_project_id = project.id
            logger.info("Created personal project %s for user %s", project.id, user.id)

        result = await self.session.execute(
            update(Task)
            .where(Task.user_id == user.id, Task.project_id.is_(None))
            .values(project_id=anchor_project_id)
        )
        if result.rowcount:
            logger.info("Attached %s legacy tasks of user %s to project %s",
                        result.rowcount, user.id, anchor_project_id)
            await self.session.commit()
        return anchor_project_id
