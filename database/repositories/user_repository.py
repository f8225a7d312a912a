
import hashlib
import hmac
import secrets
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User, utc_now

_HASH_NAME = "sha256"
_HASH_ITERATIONS = 260_000


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(_HASH_NAME, password.encode(), bytes.fromhex(salt), _HASH_ITERATIONS)
    return f"pbkdf2_{_HASH_NAME}${_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac(algorithm.removeprefix("pbkdf2_"), password.encode(),
                                 bytes.fromhex(salt), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower()).limit(1)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def get_by_auth(self, email: str, password: str) -> User | None:
        user = await self.get_by_email(email)
        if user is None or user.password_hash is None:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def create(self, email: str, password: str, name: str | None = None) -> User:
        now = utc_now()
        user = User(email=email.strip().lower(),
                    password_hash=hash_password(password),
                    name=name,
                    provider="local",
                    created_at=now,
                    updated_at=now)
        self.session.add(user)
        await self.session.commit()
        return user

    async def get_by_provider(self, provider: str, provider_id: str) -> User | None:
        stmt = select(User).where(User.provider == provider, User.provider_id == provider_id).limit(1)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def link_provider(self, user: User, provider: str, provider_id: str, name: str | None = None) -> User:
        """Attach an external identity; an existing display name is kept."""
        user.provider = provider
        user.provider_id = provider_id
        if user.name is None:
            user.name = name
        user.updated_at = utc_now()
        await self.session.commit()
        return user

    async def create_federated(self, email: str, provider: str, provider_id: str,
                               name: str | None = None) -> User:
        now = utc_now()
        user = User(email=email.strip().lower(),
                    password_hash=None,
                    name=name,
                    provider=provider,
                    provider_id=provider_id,
                    created_at=now,
                    updated_at=now)
        self.session.add(user)
        await self.session.commit()
        return user
