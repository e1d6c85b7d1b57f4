from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]

BASE_PHOTO_URL = "https://jsonplaceholder.typicode.com/photos"
MAX_PHOTOS_LIMIT = 100
DEFAULT_PHOTOS_LIMIT = 25
DEFAULT_REVALIDATE_SECONDS = 3600


class UpstreamSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: str = BASE_PHOTO_URL
    revalidate_seconds: int = Field(default=DEFAULT_REVALIDATE_SECONDS, ge=0, le=7 * 24 * 3600)
    user_agent: str = "photo-carousel/0.1"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        text = value.strip()
        parsed = urlparse(text)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("upstream.base_url must be an absolute http(s) URL")
        if parsed.query or parsed.fragment:
            raise ValueError("upstream.base_url must not carry a query string or fragment")
        return text

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("upstream.user_agent must not be empty")
        return text


class PhotosSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    default_limit: int = Field(default=DEFAULT_PHOTOS_LIMIT, ge=0)
    max_limit: int = Field(default=MAX_PHOTOS_LIMIT, ge=0, le=MAX_PHOTOS_LIMIT)
    empty_result_is_error: bool = True

    @model_validator(mode="after")
    def validate_limits(self) -> PhotosSettings:
        if self.default_limit > self.max_limit:
            raise ValueError("photos.default_limit must be <= photos.max_limit")
        return self


class CarouselYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    photos: PhotosSettings = Field(default_factory=PhotosSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    carousel_env: Literal["dev", "test", "prod"] = "dev"
    carousel_config_path: Path = Path("config/photo_carousel.yaml")
    carousel_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    carousel_host: str = "127.0.0.1"
    carousel_port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("carousel_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class AppSettings(BaseModel):
    env: EnvSettings
    yaml: CarouselYamlSettings
    project_root: Path
    config_path: Path


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> CarouselYamlSettings:
    if not path.exists():
        raise FileNotFoundError(f"Photo carousel config file not found: {path}")

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("Photo carousel config must be a YAML mapping/object at the top level")
    return CarouselYamlSettings.model_validate(raw_config)


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    env = EnvSettings()
    config_path = _resolve_project_path(env.carousel_config_path)
    yaml_settings = _load_yaml_settings(config_path)
    return AppSettings(
        env=env,
        yaml=yaml_settings,
        project_root=PROJECT_ROOT,
        config_path=config_path,
    )
