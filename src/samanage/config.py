"""Configuration for the Samanage client."""
from enum import Enum
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.samanage.com"
DEFAULT_API_VERSION = "2.1"
DEFAULT_TIMEOUT = 30.0


class ContentType(str, Enum):
    """Representations offered by the Samanage API."""

    JSON = "json"
    XML = "xml"


class ClientConfig(BaseModel):
    """Validated client configuration. Frozen once built."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="Samanage API token")
    version: str = Field(DEFAULT_API_VERSION, description="API version, e.g. 2.1")
    content_type: ContentType = ContentType.JSON
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    encode_query: bool = Field(False, description="Percent-encode query string keys and values")

    @field_validator("content_type", mode="before")
    @classmethod
    def _normalize_content_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("api_key")
    @classmethod
    def _reject_blank_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("An API key is required")
        return value

    @property
    def accept_header(self) -> str:
        return f"application/vnd.samanage.v{self.version}+{self.content_type.value}"

    @property
    def content_type_header(self) -> str:
        return f"application/{self.content_type.value}"


class Settings(BaseSettings):
    """Settings loaded from SAMANAGE_* environment variables or a .env file."""

    model_config = SettingsConfigDict(env_prefix="SAMANAGE_", env_file=".env", extra="ignore")

    key: str = ""
    api_version: str = DEFAULT_API_VERSION
    content_type: str = ContentType.JSON.value
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    encode_query: bool = False
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process."""
    load_dotenv()
    return Settings()
