"""Configuration settings for the cocktail companion client"""

from pathlib import Path
from typing import List

from pydantic import field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COCKTAIL_",
        case_sensitive=False,
        extra="ignore"
    )

    # API settings
    api_base_url: str = "https://cocktail-app-backend-0bba.onrender.com/api"
    request_timeout: int = 30  # seconds

    # Logging
    log_level: str = "INFO"
    log_file: str = "cocktail_client.log"

    # UI preferences
    default_language: str = "en"
    supported_languages: str = "en,tr,de,es,it,pt"  # Comma-separated string
    default_theme_mode: str = "light"
    preferences_path: str = str(Path.home() / ".cocktail_companion" / "preferences.json")

    # Flow rules
    min_custom_roulette_selection: int = 2
    min_wizard_selection: int = 1

    @field_validator('api_base_url')
    @classmethod
    def validate_api_url(cls, v):
        """Ensure API URL is properly formatted"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('API URL must start with http:// or https://')
        return v.rstrip('/')

    @field_validator('default_theme_mode')
    @classmethod
    def validate_theme_mode(cls, v):
        if v not in ('light', 'dark', 'system'):
            raise ValueError('Theme mode must be light, dark or system')
        return v

    def get_supported_languages(self) -> List[str]:
        """Get supported languages as list from comma-separated string"""
        languages = [lang.strip().lower() for lang in self.supported_languages.split(',') if lang.strip()]
        return languages or ["en"]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Load from .env file in project root if it exists
        env_file = Path(__file__).parent.parent / ".env"
        if env_file.exists():
            from dotenv import load_dotenv
            load_dotenv(env_file)
