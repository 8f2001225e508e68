from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Request Logger Demo"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    # Route templates excluded from request logging, as a JSON list in env:
    #   LOG_SKIP_PATHS='["/health", "/users/{user_id}"]'
    LOG_SKIP_PATHS: list[str] = ["/health"]


settings = Settings()
