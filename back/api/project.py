
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from back.depends import (get_member_repo, get_project, get_project_member,
                          get_project_owner, get_project_repo,
                          get_provisioned_user, get_task_repo, get_user_db,
                          get_user_repo)
from back.exceptions import *
from back.schemas import (AddMemberSchema, CreateProjectSchema, DataResponse,
                          ProjectMemberSchema, ProjectSchema)
from database.models import Project, ProjectMember, ProjectRole, User
from database.repositories import (ProjectMemberRepository, ProjectRepository,
                                   TaskRepository, UserRepository)

router = APIRouter(prefix="/projects", tags=["project"])


@router.get("")
async def get_projects(user: User = Depends(get_provisioned_user),
                       pr: ProjectRepository = Depends(get_project_repo)
                       ) -> DataResponse[list[ProjectSchema]]:
    return DataResponse(data=[ProjectSchema.from_db(project, role)
                              for project, role in await pr.get_by_user(user)])


@router.post("", status_code=201)
async def create_project(new_project: CreateProjectSchema,
                         user: User = Depends(get_user_db),
                         pr: ProjectRepository = Depends(get_project_repo)
                         ) -> DataResponse[ProjectSchema]:
    project = await pr.create(user, new_project.name, new_project.description)
    return DataResponse(data=ProjectSchema.from_db(project, ProjectRole.owner))


@router.get("/{project_id}/members")
async def get_members(membership: ProjectMember = Depends(get_project_member),
                      mr: ProjectMemberRepository = Depends(get_member_repo)
                      ) -> DataResponse[list[ProjectMemberSchema]]:
    return DataResponse(data=[ProjectMemberSchema.from_db(member)
                              for member in await mr.get_by_project(membership.project_id)])


@router.post("/{project_id}/members", status_code=201)
async def add_member(new_member: AddMemberSchema,
                     ownership: ProjectMember = Depends(get_project_owner),
                     mr: ProjectMemberRepository = Depends(get_member_repo),
                     ur: UserRepository = Depends(get_user_repo)
                     ) -> DataResponse[ProjectMemberSchema]:
    target = await ur.get_by_email(new_member.email)
    if target is None:
        raise UserNotFoundException()
    if target.id == ownership.user_id:
        raise AlreadyProjectMemberException()
    if await mr.get(ownership.project_id, target.id) is not None:
        raise UserAlreadyInvitedException()
    member = await mr.create(ownership.project_id, target.id, ProjectRole.member)
    return DataResponse(data=ProjectMemberSchema.from_db(member))


@router.delete("/{project_id}/members/{member_id}", status_code=204)
async def remove_member(member_id: UUID,
                        ownership: ProjectMember = Depends(get_project_owner),
                        mr: ProjectMemberRepository = Depends(get_member_repo),
                        tr: TaskRepository = Depends(get_task_repo)
                        ) -> Response:
    if member_id == ownership.user_id:
        raise OwnerCannotRemoveSelfException()
    member = await mr.get(ownership.project_id, member_id)
    if member is None:
        raise MemberNotFoundException(member_id)
    if await tr.count_open_by_assignee(ownership.project_id, member_id) > 0:
        raise MemberHasOpenTasksException()
    await mr.delete(member)
    return Response(status_code=204)


@router.delete("/{project_id}", status_code=204)
async def delete_project(project: Project = Depends(get_project),
                         ownership: ProjectMember = Depends(get_project_owner),
                         pr: ProjectRepository = Depends(get_project_repo)
                         ) -> Response:
    await pr.delete(project)
    return Response(status_code=204)
