from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    APP_NAME: str = "AssetDesk API"
    API_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Access token verification
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
