"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from record_builder.service.person_service import SCENARIO_REGISTRY

SCENARIOS = tuple(SCENARIO_REGISTRY)
OUTPUT_FORMATS = ("text", "json")


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ObservabilityConfig(BaseModel):
    log_level: str = "WARNING"
    log_format: str = "console"  # "json" or "console"

class DemoConfig(BaseModel):
    output_format: str = "text"  # "text" or "json"
    scenarios: list[str] = Field(default_factory=lambda: list(SCENARIOS))

# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    demo: DemoConfig = Field(default_factory=DemoConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "RECORD_BUILDER_", "env_nested_delimiter": "__"}

    def validate_demo(self) -> None:
        """Reject unknown scenario names and output formats."""
        from .errors import ConfigError

        unknown = [s for s in self.demo.scenarios if s not in SCENARIOS]
        if unknown:
            raise ConfigError(
                f"Unknown demo scenario(s): {', '.join(unknown)}. "
                f"Choose from {', '.join(SCENARIOS)}."
            )
        if self.demo.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unknown output format {self.demo.output_format!r}. "
                f"Choose from {', '.join(OUTPUT_FORMATS)}."
            )

def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                data = tomli.load(f)

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    return Settings(**data)
