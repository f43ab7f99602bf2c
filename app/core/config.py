import logging
from dotenv import load_dotenv
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings
from typing import List

# Load environment variables from .env file
load_dotenv(".env")
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the website mail service."""

    # ------------------------------
    # Site
    # ------------------------------
    SITE_NAME: str = Field(default="Dilshaj Infotech")
    ENVIRONMENT: str = Field(default="development")

    # ------------------------------
    # SMTP relay
    # ------------------------------
    SMTP_HOST: str = Field(default="smtp.gmail.com")
    SMTP_PORT: int = Field(default=587)
    SMTP_USERNAME: str = Field(default="")
    SMTP_PASSWORD: str = Field(default="")
    SMTP_START_TLS: bool = Field(default=True)
    SMTP_TIMEOUT: float = Field(default=30.0)

    # ------------------------------
    # Envelope addressing
    # ------------------------------
    MAIL_FROM: str = Field(default="dilshajinfotech.it@gmail.com")
    MAIL_FROM_NAME: str = Field(default="Dilshaj Infotech")
    MAIL_TO: str = Field(default="dilshajinfotech.it@gmail.com")

    # ------------------------------
    # Uploads
    # ------------------------------
    RESUME_MAX_BYTES: int = Field(default=5 * 1024 * 1024)

    # ------------------------------
    # Rate limiting
    # ------------------------------
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    CONTACT_RATE_LIMIT: str = Field(default="20/minute")

    # ------------------------------
    # Computed Fields
    # ------------------------------
    @computed_field
    @property
    def ALLOWED_ORIGINS(self) -> List[str]:
        """CORS origins for the current environment."""
        if self.ENVIRONMENT == "production":
            return [
                "https://www.dilshajinfotech.com",
                "https://dilshajinfotech.com",
            ]
        return [
            "http://localhost:5500",
            "http://127.0.0.1:5500",
            "http://localhost:8080",
        ]

    class Config:
        """Configuration for the settings class."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate the settings
settings = Settings()
