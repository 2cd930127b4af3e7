from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # DB
    DB_URL: str

    # Sessions: the cookie carries a signed token pointing at a row in user_sessions
    SESSION_SECRET: str
    SESSION_COOKIE_NAME: str = "studio_session"
    SESSION_MAX_AGE_MIN: int = 60 * 24 * 7

    # Bootstrap admin account (created/re-synced at startup)
    MASTER_PASSWORD: str
    ADMIN_USERNAME: str = "admin"

    # Chat widget (without a key the widget answers with the fallback text)
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o"
    CHAT_MAX_TOKENS: int = 150

    # Uploads
    UPLOAD_DIR: str = "uploads"
    IMAGE_MAX_WIDTH: int = 1200
    IMAGE_QUALITY: int = 80

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "prod"


settings = Settings()
