"""floco runtime settings loaded from environment variables (prefix ``FLOCO_``)."""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FloatFormatName(str, Enum):
    """Names of the supported float formats."""

    F16 = "f16"
    F32 = "f32"
    F64 = "f64"


class FlocoSettings(BaseSettings):
    """Library-wide settings.

    None of these change what a policy accepts; they only select the default
    float format and switch on extra contract checks.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOCO_",
        case_sensitive=False,
        extra="ignore",
    )

    DEFAULT_FLOAT_FORMAT: FloatFormatName = Field(
        default=FloatFormatName.F64,
        description="Float format used when a call does not pass one explicitly.",
    )

    VERIFY_DEFAULTS: bool = Field(
        default=True,
        description="Run a policy's default value through its own predicate in Floco.default().",
    )

    VERIFY_PREDICATE_PURITY: bool = Field(
        default=False,
        description="Evaluate every predicate twice and fail if the answers disagree.",
    )


@lru_cache(maxsize=1)
def get_settings() -> FlocoSettings:
    """Cached settings instance."""
    return FlocoSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
