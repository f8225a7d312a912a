import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from back.config import Config
from back.exceptions import *
from back.schemas import UserSchema
from back.token import AccessToken
from database.models import User
from database.repositories import ProjectRepository, UserRepository

from .database import get_project_repo, get_user_repo

bearer = HTTPBearer(auto_error=False)


async def get_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)
                   ) -> UserSchema:
    if credentials is None:
        raise AuthenticationRequiredException()
    try:
        access = AccessToken.from_token(credentials.credentials)
    except (jwt.PyJWTError, ValueError):
        raise InvalidAccessTokenException()
    return access.user


async def get_user_db(user: UserSchema = Depends(get_user),
                      ur: UserRepository = Depends(get_user_repo)
                      ) -> User:
    user_db = await ur.get_by_id(user.id)
    if user_db is None:
        raise InvalidAccessTokenException()
    return user_db


async def get_provisioned_user(user: User = Depends(get_user_db),
                               pr: ProjectRepository = Depends(get_project_repo)
                               ) -> User:
    await pr.ensure_baseline(user,
                             Config.personal_project_name,
                             Config.personal_project_description)
    return user
