"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    shapedetect_env: str = "development"
    shapedetect_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Largest width*height the HTTP API accepts (16 megapixels)
    max_image_pixels: int = 16_000_000

    # Default luminance cut for the binarizer
    luminance_threshold: int = 128

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
