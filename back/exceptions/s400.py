
from .base import BaseCustomHTTPException


class UserAlreadyExistsException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(409, "Account already exists")


class NothingToUpdateException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(400, "Provide at least one field to update")


class ProjectMoveNotSupportedException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(400, "Moving tasks between projects is not supported")


class AssigneeNotInProjectException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(400, "Assignee must be a member of the task's project")


class AlreadyProjectMemberException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(400, "You are already part of this project")


class OwnerCannotRemoveSelfException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(400, "Owners cannot remove themselves")


class ValidationFailedException(BaseCustomHTTPException):
    def __init__(self, issues: list):
        super().__init__(400, "Validation failed", issues)


class GoogleAccountUnverifiedException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(400, "Unable to verify Google account")
