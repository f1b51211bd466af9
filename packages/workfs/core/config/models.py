"""Configuration models for workfs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FacadeConfig(BaseModel):
    """Defaults applied by the file facade."""

    model_config = ConfigDict(frozen=True)

    default_scheme: str = Field(
        default="file",
        pattern=r"^[a-zA-Z][a-zA-Z0-9+.-]*$",
        description="Scheme given to plain string paths",
    )
    use_trash: bool = Field(
        default=True, description="Move deleted entries to the trash when the provider supports it"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string (ignored when structured)",
    )

    structured: bool = Field(default=False, description="Emit JSON lines instead of text")

    filename: str | None = Field(default=None, description="Log file path (stdout if unset)")


class AppConfig(BaseModel):
    """Application configuration."""

    facade: FacadeConfig = Field(default_factory=FacadeConfig)

    memory_scheme: str = Field(
        default="memfs",
        pattern=r"^[a-zA-Z][a-zA-Z0-9+.-]*$",
        description="Scheme served by the in-memory provider",
    )

    readonly_schemes: list[str] = Field(
        default_factory=list, description="Registered schemes that reject writes"
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
