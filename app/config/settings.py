from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for admin operations like granting admin access

    # OpenAI (chat companion, reports, insights, Whisper transcription)
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 60.0
    whisper_model: str = "whisper-1"

    # App
    app_name: str = "elmora-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://localhost:8080,http://localhost:8081,http://127.0.0.1:3000,http://127.0.0.1:5173,http://127.0.0.1:8081"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    chat_rate_limit: str = "100 per 15 minutes"
    admin_emails: str = ""  # comma separated, checked in addition to admin_users table

    # Wellness
    checkin_timezone: str = "UTC"
    trend_slope_threshold: float = 0.1
    insights_min_checkins: int = 3
    chat_max_message_length: int = 1000
    max_audio_bytes: int = 10 * 1024 * 1024
    pomodoro_focus_minutes: int = 25
    pomodoro_break_minutes: int = 5

    @field_validator("checkin_timezone")
    @classmethod
    def validate_checkin_timezone(cls, v: str) -> str:
        if v.upper() == "UTC":
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown CHECKIN_TIMEZONE: {v}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key)

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_admin_emails_list(self) -> List[str]:
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
