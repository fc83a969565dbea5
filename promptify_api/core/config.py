"""Configuration and settings"""

from typing import List, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorConfig(BaseModel):
    """Read-only generation settings handed to the pipeline at construction"""
    model: str = "gpt-4o"
    max_attempts: int = Field(default=3, ge=1)
    max_output_tokens: int = Field(default=7000, ge=256)
    temperature: Optional[float] = None
    request_timeout: float = Field(default=300.0, gt=0)


class Settings(BaseSettings):
    """Application settings from environment variables"""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True)

    # OpenAI API
    openai_api_key: str = ""
    model: str = "gpt-4o"
    max_attempts: int = Field(default=3, ge=1)
    max_output_tokens: int = Field(default=7000, validation_alias=AliasChoices("max_output_tokens", "max_tokens"))
    # Not every model accepts temperature; only sent when set
    temperature: Optional[float] = None
    request_timeout: float = 300.0

    # Server
    allowed_origins: str = "*"
    base_url: str = "http://localhost:8080"
    log_level: str = "INFO"

    # Site storage and uploads
    sites_dir: str = "./sites"
    max_upload_bytes: int = 2 * 1024 * 1024

    # API Configuration
    api_title: str = "Promptify Generator API"
    api_version: str = "0.1.0"

    @field_validator("temperature", mode="before")
    @classmethod
    def blank_temperature(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def origins(self) -> List[str]:
        """CORS allowlist; ["*"] when unrestricted"""
        raw = self.allowed_origins.strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]

    def generator_config(self) -> GeneratorConfig:
        return GeneratorConfig(
            model=self.model,
            max_attempts=self.max_attempts,
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
            request_timeout=self.request_timeout,
        )


# Global settings instance
settings = Settings()
