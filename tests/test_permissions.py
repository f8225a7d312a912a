
from uuid import uuid4

import pytest

from back.permissions import (can_complete_task, can_manage_project,
                              can_mutate_task, can_view_task, is_owner,
                              is_transition_to_done)
from database.models import (Project, ProjectMember, ProjectRole, Task,
                             TaskStatus, User, utc_now)
from database.repositories import ProjectMemberRepository, TaskRepository

PROJECT = uuid4()
OTHER_PROJECT = uuid4()
CREATOR = uuid4()
ASSIGNEE = uuid4()
STRANGER = uuid4()


def make_task(status: TaskStatus = TaskStatus.todo, project_id=PROJECT) -> Task:
    return Task(title="Write copy", description="Landing page", status=status.value,
                user_id=CREATOR, assignee_id=ASSIGNEE, project_id=project_id)


def membership(role: ProjectRole, project_id=PROJECT) -> ProjectMember:
    return ProjectMember(project_id=project_id, user_id=STRANGER, role=role.value)


def test_visibility() -> None:
    task = make_task()
    assert can_view_task(task, CREATOR, None)
    assert can_view_task(task, ASSIGNEE, None)
    assert can_view_task(task, STRANGER, membership(ProjectRole.member))
    assert not can_view_task(task, STRANGER, None)
    assert not can_view_task(task, STRANGER, membership(ProjectRole.owner, OTHER_PROJECT))


def test_mutation_needs_membership_in_task_project() -> None:
    task = make_task()
    assert can_mutate_task(task, membership(ProjectRole.member))
    assert not can_mutate_task(task, None)
    assert not can_mutate_task(task, membership(ProjectRole.owner, OTHER_PROJECT))
    assert not can_mutate_task(make_task(project_id=None), membership(ProjectRole.owner))


def test_only_owners_complete() -> None:
    task = make_task(TaskStatus.in_progress)
    assert is_transition_to_done(task, TaskStatus.done)
    assert can_complete_task(task, membership(ProjectRole.owner), TaskStatus.done)
    assert not can_complete_task(task, membership(ProjectRole.member), TaskStatus.done)
    assert can_complete_task(task, membership(ProjectRole.member), TaskStatus.todo)
    assert can_complete_task(task, membership(ProjectRole.member), None)


def test_done_to_done_is_not_a_transition() -> None:
    task = make_task(TaskStatus.done)
    assert not is_transition_to_done(task, TaskStatus.done)
    assert can_complete_task(task, membership(ProjectRole.member), TaskStatus.done)


def test_project_management_is_owner_only() -> None:
    assert can_manage_project(membership(ProjectRole.owner))
    assert not can_manage_project(membership(ProjectRole.member))
    assert not can_manage_project(None)
    assert not is_owner(ProjectMember(project_id=PROJECT, user_id=STRANGER, role="admin"))


@pytest.mark.asyncio
async def test_visibility_matches_repository_query(db) -> None:
    now = utc_now()
    async with db.context_session() as session:
        creator, assignee, member, stranger = users = [
            User(email=f"{name}@example.com", created_at=now, updated_at=now)
            for name in ("creator", "assignee", "member", "stranger")
        ]
        session.add_all(users)
        await session.flush()
        project = Project(name="Launch plan", owner_id=member.id, created_at=now, updated_at=now)
        session.add(project)
        await session.flush()
        session.add(ProjectMember(project_id=project.id, user_id=member.id, role=ProjectRole.owner.value))
        tasks = [
            Task(title="In project", description="x", user_id=creator.id, project_id=project.id,
                 created_at=now, updated_at=now),
            Task(title="Assigned", description="x", user_id=creator.id, assignee_id=assignee.id,
                 created_at=now, updated_at=now),
            Task(title="Legacy", description="x", user_id=creator.id, created_at=now, updated_at=now),
        ]
        session.add_all(tasks)
        await session.commit()

        tr = TaskRepository(session)
        mr = ProjectMemberRepository(session)
        for user in users:
            for task in tasks:
                membership = await mr.get(task.project_id, user.id) if task.project_id else None
                expected = can_view_task(task, user.id, membership)
                assert (await tr.get_visible(task.id, user.id) is not None) is expected, (user.email, task.title)
