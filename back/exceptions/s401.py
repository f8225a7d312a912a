
from .base import BaseCustomHTTPException


class AuthenticationRequiredException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(401, "Authentication required")


class InvalidAccessTokenException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(401, "Invalid or expired token")


class InvalidCredentialsException(BaseCustomHTTPException):
    def __init__(self):
        super().__init__(401, "Invalid email or password")


class TooManyIncorrectCredentialsException(BaseCustomHTTPException):
    def __init__(self, ip: str):
        super().__init__(401, f"Too many failed login attempts from IP: {ip}")
