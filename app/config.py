from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite://"  # in-memory, reset on restart
    SECRET_KEY: str = "robusphere_secret_key"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    VIEWERS_START: int = 1240
    STATIC_DIR: str | None = None
    CORS_ORIGINS: list[str] = ["*"]

    model_config = {"env_file": ".env"}


settings = Settings()
