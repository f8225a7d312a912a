
from fastapi import APIRouter, Depends, Request
from redis.asyncio import Redis

from back.config import Config
from back.depends import get_user_db, get_user_repo
from back.exceptions import *
from back.google_auth import GOOGLE_PROVIDER, verify_google_id_token
from back.schemas import (AuthSchema, CredsSchema, DataResponse,
                          GoogleSignInSchema, RegisterSchema, UserSchema)
from back.token import AccessToken
from config import settings
from database.models import User
from database.redis import RedisType, get_redis_client
from database.repositories import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])


async def check_ip(request: Request, redis: Redis) -> tuple[str, int]:
    ip = request.client.host if request.client else "unknown"
    ip_counter = await redis.get(RedisType.incorrect_credentials_ip.key(ip))
    if ip_counter is None:
        return ip, 0
    if int(ip_counter) >= Config.ip_buffer:
        raise TooManyIncorrectCredentialsException(ip)
    return ip, int(ip_counter)


def issue_token(user: User) -> AuthSchema:
    user_schema = UserSchema.from_db(user)
    return AuthSchema(token=AccessToken(user_schema).to_token(), user=user_schema)


@router.post("/register", status_code=201)
async def register(request: Request,
                   register_data: RegisterSchema,
                   redis: Redis = Depends(get_redis_client),
                   ur: UserRepository = Depends(get_user_repo)
                   ) -> DataResponse[AuthSchema]:
    await check_ip(request, redis)
    if await ur.get_by_email(register_data.email) is not None:
        raise UserAlreadyExistsException()
    user = await ur.create(register_data.email, register_data.password, register_data.name)
    return DataResponse(data=issue_token(user))


@router.post("/login")
async def login(request: Request,
                credentials: CredsSchema,
                redis: Redis = Depends(get_redis_client),
                ur: UserRepository = Depends(get_user_repo)
                ) -> DataResponse[AuthSchema]:
    ip, ip_counter = await check_ip(request, redis)
    user = await ur.get_by_auth(credentials.email, credentials.password)
    if user is None:
        await redis.set(RedisType.incorrect_credentials_ip.key(ip), ip_counter + 1,
                        ex=Config.ip_buffer_lifetime)
        raise InvalidCredentialsException()
    return DataResponse(data=issue_token(user))


@router.post("/google")
async def google_sign_in(google_data: GoogleSignInSchema,
                         ur: UserRepository = Depends(get_user_repo)
                         ) -> DataResponse[AuthSchema]:
    if not settings.google_client_id:
        raise GoogleAuthNotConfiguredException()
    profile = await verify_google_id_token(google_data.id_token, settings.google_client_id)
    if profile is None:
        raise GoogleAccountUnverifiedException()
    user = await ur.get_by_provider(GOOGLE_PROVIDER, profile.subject) \
        or await ur.get_by_email(profile.email)
    if user is None:
        user = await ur.create_federated(profile.email, GOOGLE_PROVIDER, profile.subject, profile.name)
    else:
        user = await ur.link_provider(user, GOOGLE_PROVIDER, profile.subject, profile.name)
    return DataResponse(data=issue_token(user))


@router.get("/me")
async def me(user: User = Depends(get_user_db)) -> DataResponse[UserSchema]:
    return DataResponse(data=UserSchema.from_db(user))
