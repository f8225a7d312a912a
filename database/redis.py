from enum import Enum

from redis.asyncio import Redis

from config import settings

_client: Redis | None = None


class RedisType(str, Enum):
    incorrect_credentials_ip = "incorrect_credentials_ip"

    def key(self, suffix: object) -> str:
        return f"{self.value}:{suffix}"


def get_redis_client() -> Redis:
    """Process-wide client; the connection pool is created lazily on first use."""
    global _client
    if _client is None:
        _client = Redis(host=settings.redis_ip,
                        port=settings.redis_port,
                        db=0,
                        decode_responses=True)
    return _client


async def close_redis_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
