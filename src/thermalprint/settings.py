"""
Conversion settings using Pydantic.

Library-wide defaults are loaded from environment variables (prefix
``THERMALPRINT_``) with .env file support; per-call options are a plain
Pydantic model seeded from them.
"""

from functools import lru_cache
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from thermalprint.errors import ConfigurationError
from thermalprint.ir.nodes import NodeType

BackendName = Literal["escpos", "escbematech", "pdf"]
CutOption = Literal["full", "partial", "none"]


class Settings(BaseSettings):
    """Library defaults."""

    model_config = SettingsConfigDict(
        env_prefix="THERMALPRINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: BackendName = "escpos"
    debug: bool = False

    # Thermal paper
    paper_width: int = Field(default=48, ge=1)  # characters per line at 1x1
    dots_per_char: int = Field(default=12, ge=1)
    line_spacing: Optional[int] = Field(default=None, ge=0, le=255)

    # Cutting
    cut: CutOption = "full"
    feed_before_cut: int = Field(default=3, ge=0, le=255)

    # Vector page
    point_width: float = Field(default=205.0, gt=0)
    point_height: Optional[float] = Field(default=None, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class ConversionOptions(BaseModel):
    """Options of a single conversion."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: BackendName = "escpos"
    paper_width: int = Field(default=48, ge=1)
    point_width: float = Field(default=205.0, gt=0)
    point_height: Optional[float] = Field(default=None, gt=0)
    cut: CutOption = "full"
    feed_before_cut: int = Field(default=3, ge=0, le=255)
    line_spacing: Optional[int] = Field(default=None, ge=0, le=255)
    dots_per_char: int = Field(default=12, ge=1)
    debug: bool = False
    component_mapping: Optional[Dict[str, Union[NodeType, str]]] = None

    @property
    def is_thermal(self) -> bool:
        return self.backend != "pdf"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides: Any) -> "ConversionOptions":
        """Build options from library settings, then apply overrides.

        Raises:
            ConfigurationError: If an option is unknown or out of range
        """
        settings = settings or get_settings()
        values = settings.model_dump(include=set(cls.model_fields))
        values.update(overrides)
        return build_options(values)


def build_options(values: Dict[str, Any]) -> ConversionOptions:
    """Validate raw option values.

    Raises:
        ConfigurationError: If an option is unknown or out of range
    """
    try:
        return ConversionOptions(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid conversion options: {e}") from e
