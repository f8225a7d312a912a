
from .base import BaseCustomHTTPException


class UserAlreadyInvitedException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(409, "That teammate is already part of the project")


class MemberHasOpenTasksException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(409, "Reassign this member's open tasks before removing them")


class ConflictException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(409, "The record conflicts with an existing one")
