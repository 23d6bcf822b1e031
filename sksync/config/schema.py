# SKSYNC Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ServerConfig(BaseModel):
    """Remote version store settings."""

    url: str = Field(default="https://www.skillhub.club", description="Server base URL")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    token_env: str = Field(default="SKSYNC_TOKEN", description="Environment variable holding the access token")
    cache_ttl: float = Field(default=60.0, ge=0, description="Read cache TTL in seconds (0 disables)")

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize URL and require http(s)."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return v.rstrip("/")


class LocalConfig(BaseModel):
    """Local skill directory settings."""

    skills_dir: str = Field(default="~/.claude/skills", description="Directory containing local skills")
    max_depth: int = Field(default=16, ge=0, description="Maximum directory depth collected from a skill")
    exclude: list[str] = Field(default_factory=list, description="Glob patterns never collected or pushed")

    @field_validator("skills_dir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    sync_history: str | None = Field(default=None, description="Path to sync history log")

    @field_validator("sync_history")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional path."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class SksyncConfig(BaseModel):
    """Root configuration model for SKSYNC."""

    server: ServerConfig = Field(default_factory=ServerConfig, description="Server settings")
    local: LocalConfig = Field(default_factory=LocalConfig, description="Local settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    def skill_dir(self, slug: str) -> Path:
        """Default local directory for a skill."""
        return Path(self.local.skills_dir) / slug
