
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from back.config import SECRET, Config
from back.schemas.user import UserSchema


class AccessToken:
    lifetime = timedelta(seconds=Config.access_token_lifetime)

    def __init__(self, user: UserSchema, created_date: datetime | None = None) -> None:
        self.user = user
        self.created_date = created_date or datetime.now(UTC).replace(tzinfo=None)

    def to_token(self) -> str:
        payload = {
            "sub": str(self.user.id),
            "email": self.user.email,
            "iat": self.created_date.replace(tzinfo=UTC),
            "exp": (self.created_date + self.lifetime).replace(tzinfo=UTC),
        }
        if self.user.name:
            payload["name"] = self.user.name
        return jwt.encode(payload, SECRET, algorithm=Config.algorithm)

    @classmethod
    def from_token(cls, token: str) -> "AccessToken":
        """Decode and verify a token; raises jwt.PyJWTError when it is
        malformed, forged or expired."""
        payload = jwt.decode(token, SECRET, algorithms=[Config.algorithm],
                             options={"require": ["sub", "exp", "iat"]})
        user = UserSchema(id=UUID(payload["sub"]),
                          email=payload.get("email", ""),
                          name=payload.get("name"))
        created_date = datetime.fromtimestamp(payload["iat"], UTC).replace(tzinfo=None)
        return cls(user, created_date)
