# app/core/config.py

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment (Docker Compose / Vercel-style
    # env injection). A local .env file is honoured for development.
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "AMASI Command Center"

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Database URLs ---
    DATABASE_URL_PROD: Optional[str] = None
    DATABASE_URL_LOCAL: str = "sqlite:///./command_center.db"

    # Auth
    JWT_SECRET: str

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Public base URL used for invitation / response links
    APP_BASE_URL: str = "http://localhost:3000"

    # --- Email providers (first configured one wins) ---
    EMAIL_FROM_NAME: str = "AMASI Command Center"
    EMAIL_FROM_ADDRESS: str = "noreply@amasi.org"
    RESEND_API_KEY: Optional[str] = None
    BLASTABLE_API_KEY: Optional[str] = None
    BLASTABLE_API_URL: str = "https://api.blastable.com/v1/email/send"

    # --- WhatsApp template provider ('meta' or 'twilio') ---
    WHATSAPP_PROVIDER: Optional[str] = None
    WHATSAPP_PHONE_NUMBER_ID: Optional[str] = None
    WHATSAPP_ACCESS_TOKEN: Optional[str] = None
    WHATSAPP_TEMPLATE_LANGUAGE: str = "en"
    TWILIO_ACCOUNT_SID: Optional[str] = None
    TWILIO_AUTH_TOKEN: Optional[str] = None
    TWILIO_WHATSAPP_NUMBER: Optional[str] = None

    # --- Dynamic Properties ---
    @property
    def DATABASE_URL(self) -> str:
        if self.ENV == "local" or not self.DATABASE_URL_PROD:
            return self.DATABASE_URL_LOCAL
        return self.DATABASE_URL_PROD

    @property
    def EMAIL_PROVIDER(self) -> Optional[str]:
        if self.RESEND_API_KEY:
            return "resend"
        if self.BLASTABLE_API_KEY:
            return "blastable"
        return None


# Create a single instance of the settings
settings = Settings()
