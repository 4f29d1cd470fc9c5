"""Configuration management for depviz."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .render.dot import RankDir


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DEPVIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scanning settings
    source_extension: str = Field(
        default=".java",
        description="Extension of the source files to scan",
    )
    parallel: bool = Field(
        default=True,
        description="Scan the source tree with a worker pool",
    )
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Worker pool size for parallel scans (defaults to the executor's choice)",
    )

    # Rendering settings
    rank_dir: RankDir = Field(
        default=RankDir.LR,
        description="Layout direction of the rendered graph",
    )
    renderer_command: str = Field(
        default="dot",
        description="Graphviz executable used to rasterize the graph",
    )
    output_format: str = Field(
        default="svg",
        description="Output format passed to the renderer as -T<format>",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("source_extension", mode="before")
    @classmethod
    def validate_source_extension(cls, v: str) -> str:
        """Ensure the extension carries its leading dot."""
        v = v.strip()
        if not v:
            raise ValueError("Source extension must not be empty")
        return v if v.startswith(".") else f".{v}"

    @field_validator("rank_dir", mode="before")
    @classmethod
    def validate_rank_dir(cls, v: str | RankDir) -> RankDir:
        """Parse a rank direction token (lr, rl, tb, bt)."""
        if isinstance(v, RankDir):
            return v
        return RankDir.parse(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
