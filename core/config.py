"""
Application settings - process-wide configuration.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Project settings"""

    DEBUG: bool = Field(default=True, validation_alias="DEBUG")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
    )


settings = Settings()
