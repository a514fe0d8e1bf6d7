"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./users.db"
    database_echo: bool = False

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = "dev-secret"       # HMAC secret for access tokens
    jwt_algorithm: str = "HS256"
    jwt_expiry_seconds: int = 3600       # 1 hour
    bcrypt_rounds: int = 10              # cost factor for password hashes

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


config = Settings()
