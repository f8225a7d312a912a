
from .base import BaseCustomHTTPException


class ProjectAccessDeniedException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(403, "You do not have access to this project")


class OwnerRequiredException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(403, "Only the project owner can perform this action")


class CompletionRequiresOwnerException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(403, "Only the project owner can mark tasks as done")
