
from uuid import UUID

from .base import BaseCustomHTTPException


class ProjectNotFoundException(BaseCustomHTTPException):
    def __init__(self, project_id: UUID):
        super().__init__(404, f"Project not found, project_id: {project_id}")


class TaskNotFoundException(BaseCustomHTTPException):
    def __init__(self, task_id: UUID):
        super().__init__(404, f"Task not found, task_id: {task_id}")


class UserNotFoundException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(404, "No user with that email exists yet")


class MemberNotFoundException(BaseCustomHTTPException):
    def __init__(self, member_id: UUID):
        super().__init__(404, f"Member not found in this project, member_id: {member_id}")


class RouteNotFoundException(BaseCustomHTTPException):
    def __init__(self, method: str, path: str):
        super().__init__(404, f"Route {method} {path} was not found")
