"""Configuration models."""

from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spreadtheword.errors import ConfigurationError

DEFAULT_TITLE = "Release Notes"


class GitlabConfig(BaseModel):
    """Connection settings for the GitLab issue tracker."""

    endpoint: str = Field(..., description="API endpoint, e.g. https://gitlab.example.com/api/v4")
    token: str = Field(..., description="Private access token")
    timeout: float = Field(10.0, description="Per-request timeout in seconds")

    @property
    def host(self) -> str:
        """Host name matched against project remotes."""
        return urlparse(self.endpoint).hostname or ""


class WrikeConfig(BaseModel):
    """Connection settings for the Wrike task tracker."""

    token: str = Field(..., description="Permanent access token")
    api_url: str = Field("https://www.wrike.com/api/v4", description="Wrike REST base URL")
    timeout: float = Field(10.0, description="Per-request timeout in seconds")


class TranslateConfig(BaseModel):
    """Settings for Google Translate."""

    api_key: str = Field(..., description="Google Cloud API key")
    target: str = Field("en", description="Target language code")
    timeout: float = Field(10.0, description="Per-request timeout in seconds")


class ChangelogConfig(BaseModel):
    """What to collect and how to label the resulting document."""

    projects: List[Path] = Field(default_factory=list, description="Project checkouts, in output order")
    since: Optional[str] = Field(None, description="Lower revision bound (exclusive)")
    title: str = Field(DEFAULT_TITLE, description="Document title")
    author: Optional[str] = Field(None, description="Document author; defaults to git user.name")

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "projects": ["/src/app", "/src/lib"],
                "since": "v1.2.0",
                "title": "Release Notes",
                "author": "Alice",
            }
        }


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with SPREADTHEWORD_ (e.g. SPREADTHEWORD_GITLAB_TOKEN).
    An integration is enabled by setting its token.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPREADTHEWORD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitLab
    gitlab_endpoint: Optional[str] = None
    gitlab_token: Optional[str] = None

    # Wrike
    wrike_token: Optional[str] = None

    # Google Translate
    google_translate_key: Optional[str] = None
    translate_target: str = "en"

    # HTTP
    request_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"

    def validate_integrations(self) -> None:
        """Fail before any processing when an enabled integration is incomplete.

        Raises:
            ConfigurationError: If GitLab is enabled without a usable endpoint
        """
        if self.gitlab_token:
            if not self.gitlab_endpoint:
                raise ConfigurationError("GitLab token given but no GitLab endpoint configured")
            parsed = urlparse(self.gitlab_endpoint)
            if parsed.scheme not in ("http", "https") or not parsed.hostname:
                raise ConfigurationError(f"Invalid GitLab endpoint: {self.gitlab_endpoint}")
        elif self.gitlab_endpoint:
            raise ConfigurationError("GitLab endpoint given but no GitLab token configured")
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive")

    def gitlab_config(self) -> Optional[GitlabConfig]:
        if not self.gitlab_token:
            return None
        return GitlabConfig(
            endpoint=self.gitlab_endpoint,
            token=self.gitlab_token,
            timeout=self.request_timeout,
        )

    def wrike_config(self) -> Optional[WrikeConfig]:
        if not self.wrike_token:
            return None
        return WrikeConfig(token=self.wrike_token, timeout=self.request_timeout)

    def translate_config(self) -> Optional[TranslateConfig]:
        if not self.google_translate_key:
            return None
        return TranslateConfig(
            api_key=self.google_translate_key,
            target=self.translate_target,
            timeout=self.request_timeout,
        )
