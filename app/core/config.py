from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import PostgresDsn, computed_field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    POSTGRES_USER: str = "swarsh"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "swarsh"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    # Full SQLAlchemy URL, e.g. sqlite+aiosqlite:///./swarsh.db for local runs
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @computed_field
    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return str(PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD or None,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        ))

    ENV: str = "production"
    APP_DOMAIN: Optional[str] = None
    FRONTEND_URL: str = "http://localhost:5173"

    # Sessions
    SESSION_COOKIE_NAME: str = "swarsh_session"
    SESSION_DAYS: int = 7  # Session lifetime
    COOKIE_SECURE: bool = False

    # Pairing & chat
    INVITE_TOKEN_LENGTH: int = 6
    MAX_MESSAGE_LENGTH: int = 2000

settings = Settings()
