from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_TIMEOUT_SECONDS: float = 10.0

    BUSINESS_NAME: str = "Your Salon"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    FIRST_SLOT: str = "09:00"
    LAST_SLOT: str = "17:30"
    SLOT_INTERVAL_MINUTES: int = 30
    CLOSED_WEEKDAYS: list[int] = [6]  # Monday=0 ... Sunday=6

    WIZARD_SESSION_TTL_SECONDS: float = 3600.0  # idle wizard sessions are dropped after this


settings = Settings()
