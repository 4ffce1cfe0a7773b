"""Configuration for the Markov interpreter using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunnerSettings(BaseSettings):
    """Settings for driving a runner under a step budget."""

    model_config = SettingsConfigDict(
        env_prefix="MARKOV_RUNNER_",
    )

    max_steps: int = Field(
        default=10000,
        ge=1,
        description="Maximum number of steps a bounded drive may take before stopping",
    )

    stop_on_stall: bool = Field(
        default=True,
        description="Stop a bounded drive when a step leaves the context unchanged",
    )


class MarkovSettings(BaseSettings):
    """Global settings for the interpreter."""

    model_config = SettingsConfigDict(
        env_prefix="MARKOV_",
    )

    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    default_algorithm: str = Field(
        default="default",
        description="Algorithm to load from YAML files when none is named",
    )


# Global settings instance that can be accessed throughout the application
_settings: MarkovSettings | None = None


def get_settings() -> MarkovSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = MarkovSettings()
    return _settings


def set_settings(settings: MarkovSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings
