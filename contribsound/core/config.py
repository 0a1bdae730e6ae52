# contribsound/core/config.py
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from contribsound.core.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Runtime settings with safe local defaults.

    - GITHUB_TOKEN is OPTIONAL until GitHub data is actually fetched
    - Rendering WAV from a local JSON file needs no settings at all
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # GitHub GraphQL (required only when fetching contributions)
    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_graphql_url: str = Field(default="https://api.github.com/graphql", alias="GITHUB_GRAPHQL_URL")
    github_user_agent: str = Field(default="contribsound", alias="GITHUB_USER_AGENT")
    http_timeout_sec: int = Field(default=20, alias="HTTP_TIMEOUT_SEC")

    # Transcoding
    ffmpeg_binary: str = Field(default="ffmpeg", alias="FFMPEG_BINARY")
    mp3_bitrate: str = Field(default="192k", alias="MP3_BITRATE")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def validate_github_or_raise(self) -> None:
        """
        Call this ONLY when you actually talk to GitHub.
        Local rendering must keep working without a token.
        """
        if not (self.github_token or "").strip():
            raise ConfigurationError(
                "GitHub access requested but required env vars are missing: GITHUB_TOKEN"
            )


settings = Settings()
