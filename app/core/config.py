"""Configuration settings for the portfolio API.

This module manages environment variables and application settings.
"""
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class ContactPipelineConfig:
    """Explicit switches consumed by the contact pipeline.

    Attributes:
        has_credentials: Whether a mail transport is configured
        is_production: Whether delivery failures must be reported to the caller
        destination_address: Mailbox that receives contact form messages
        sender_address: Mail account identity used in the From header
    """
    has_credentials: bool
    is_production: bool
    destination_address: Optional[str] = None
    sender_address: Optional[str] = None


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings.

    Attributes:
        API_PREFIX: API path prefix
        PROJECT_NAME: Name of the project
        DEBUG: Debug mode flag
        ENVIRONMENT: Runtime mode, "production" enables strict mail delivery
        EMAIL_SENDER: Mail account identity used to send contact messages
        CONTACT_EMAIL: Destination override for contact messages
    """
    def __init__(self):
        self.API_PREFIX = "/api"
        self.PROJECT_NAME = "Portfolio API"
        self.DEBUG = _env_flag("DEBUG")
        self.ENVIRONMENT = os.getenv("APP_ENV", "development").lower()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # CORS Settings
        self.CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
        self.TRUST_PROXY_HEADERS = _env_flag("TRUST_PROXY_HEADERS")

        # AWS SETTINGS
        self.AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID")
        self.AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY")
        self.AWS_REGION = os.getenv("AWS_REGION", "us-east-1")

        # Email Settings
        self.EMAIL_SENDER = os.getenv("EMAIL_SENDER")
        self.CONTACT_EMAIL = os.getenv("CONTACT_EMAIL")

        # Rate limit Settings
        self.RATE_LIMIT_BACKEND = os.getenv("RATE_LIMIT_BACKEND", "memory").lower()
        self.RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", 15 * 60))
        self.RATE_LIMIT_MAX_SUBMISSIONS = int(os.getenv("RATE_LIMIT_MAX_SUBMISSIONS", 5))

        # Redis Settings
        self.REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
        self.REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))

        # Static data and front-end
        self.PORTFOLIO_DATA_FILE = os.getenv(
            "PORTFOLIO_DATA_FILE",
            os.path.join(os.path.dirname(os.path.dirname(__file__)), "data", "portfolio.json"),
        )
        self.FRONTEND_BUILD_DIR = os.getenv("FRONTEND_BUILD_DIR")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def has_mail_credentials(self) -> bool:
        return bool(self.EMAIL_SENDER and self.AWS_ACCESS_KEY_ID and self.AWS_SECRET_ACCESS_KEY)

    @property
    def contact_destination(self) -> Optional[str]:
        return self.CONTACT_EMAIL or self.EMAIL_SENDER

    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]

    def contact_pipeline_config(self) -> ContactPipelineConfig:
        """Build the contact pipeline switches from the current environment."""
        return ContactPipelineConfig(
            has_credentials=self.has_mail_credentials,
            is_production=self.is_production,
            destination_address=self.contact_destination,
            sender_address=self.EMAIL_SENDER,
        )


settings = Settings()
