"""Validator configuration.

Loaded from a YAML file (``--config`` or ``.param-check.yaml`` in the working
directory); CLI options override file values.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from param_check.errors import ConfigurationError
from param_check.validator.findings import Severity

DEFAULT_CONFIG_FILE = ".param-check.yaml"


class ValidatorConfig(BaseModel):
    severity: Severity = Field(default=Severity.ERROR, description="Severity of every reported finding")
    exempt_locations: list[str] = Field(
        default=["header"],
        description="Contract parameter locations that need no implementation",
    )
    fail_on_warning: bool = Field(default=False, description="Exit non-zero on warning findings too")
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="console", description="console or json")


def load_config(path: Path | None = None) -> ValidatorConfig:
    """Load the configuration file, falling back to defaults when there is none."""
    if path is None:
        default = Path.cwd() / DEFAULT_CONFIG_FILE
        if not default.exists():
            return ValidatorConfig()
        path = default

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot load config {path}: {e}", {"path": str(path)}) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {path} must be a mapping", {"path": str(path)})

    try:
        return ValidatorConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}: {e}", {"path": str(path)}) from e
