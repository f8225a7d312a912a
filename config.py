import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=f"{os.getenv('TARGET', 'dev')}.env",
                                      extra="ignore")

    environment: str = "development"
    log_level: str = "INFO"

    db_user: str = "postgres"
    db_password: str = "1234"
    db_ip: str = "postgres"
    db_port: int = 5432
    db_name: str = "tasks_db"
    db_url: str | None = None
    db_echo: bool = False
    redis_ip: str = "redis"
    redis_port: int = 6379
    secret: str = "CHANGE_ME_TO_A_RANDOM_SECRET_OF_32_CHARS"
    client_origin: str | None = None
    google_client_id: str | None = None

    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_from: str | None = None
    smtp_secure: bool = False


settings = Settings()
