from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Barber Booking API"
    API_PREFIX: str = "/api"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5001
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_FILE: str = "logs/errors.log"

    # Database
    DATABASE_URL: str = "sqlite:///./booking.db"

    # Admin auth
    ADMIN_PASSWORD: str = ""
    JWT_SECRET: str = "dev_secret_key"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_DAYS: int = 7
    AUTH_COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = False

    # Notifications
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_PHONE_NUMBER: str = ""
    # Run the SMS send after the response instead of inline
    SMS_IN_BACKGROUND: bool = False

    # Business
    BUSINESS_NAME: str = "ericfadezz"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"
    CALENDAR_DOMAIN: str = "ericfadezz.local"

    class Config:
        env_file = ".env"
        case_sensitive = True
        # .env is shared with the Streamlit front end
        extra = "ignore"

    @property
    def sms_configured(self) -> bool:
        return bool(self.TWILIO_ACCOUNT_SID and self.TWILIO_AUTH_TOKEN and self.TWILIO_PHONE_NUMBER)


def get_settings() -> Settings:
    return Settings()
