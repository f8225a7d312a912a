
from .base import BaseCustomHTTPException


class InternalServerException(BaseCustomHTTPException):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(500, message)


class GoogleAuthNotConfiguredException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(500, "Google authentication is not configured")
