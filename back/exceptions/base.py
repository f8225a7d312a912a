
from typing import Any

from fastapi import HTTPException


class BaseCustomHTTPException(HTTPException):
    def __init__(self, status_code: int, message: str, issues: list[Any] | None = None):
        super().__init__(status_code=status_code, detail=message)
        self.issues = issues
