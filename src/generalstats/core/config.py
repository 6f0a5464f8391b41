"""
Configuration Management for GeneralStats

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables

Configuration precedence (highest to lowest):
1. Environment variables (GENERALSTATS_*)
2. Configuration file
3. Default values
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from generalstats.core.constants import (
    AXIS_COLOR,
    CHART_HEIGHT,
    CHART_MARGIN,
    CHART_WIDTH,
    LINE_COLOR,
    REPLAYS_API_BASE,
    REPLAYS_PAGE_SIZE,
    REPLAYS_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class ApiConfig:
    """Configuration for the replay history client."""

    base_url: str = REPLAYS_API_BASE
    page_size: int = REPLAYS_PAGE_SIZE
    timeout_seconds: float = REPLAYS_TIMEOUT_SECONDS
    # Stop after this many pages (None = until an empty page)
    max_pages: int | None = None


@dataclass
class ChartConfig:
    """Configuration for chart layout and colors."""

    margin: int = CHART_MARGIN
    width: int = CHART_WIDTH
    height: int = CHART_HEIGHT
    line_color: str = LINE_COLOR
    axis_color: str = AXIS_COLOR

    @property
    def origin(self) -> tuple[int, int]:
        """Top-left corner of the plot area."""
        return (self.margin, self.margin)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class GeneralStatsConfig:
    """Main configuration container."""

    api: ApiConfig = field(default_factory=ApiConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Version of the config format
    config_version: str = "1.0"


# ============================================================================
# Configuration Loading
# ============================================================================


def get_default_config_paths() -> list[Path]:
    """Get the default paths to search for configuration files."""
    paths = []

    # Current directory
    paths.append(Path.cwd() / "generalstats.toml")
    paths.append(Path.cwd() / "generalstats.yaml")
    paths.append(Path.cwd() / "generalstats.json")

    # XDG config directory
    home = Path.home()
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(home / ".config"))
    paths.append(Path(xdg_config) / "generalstats" / "config.toml")
    paths.append(Path(xdg_config) / "generalstats" / "config.yaml")

    return paths


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file."""
    try:
        import yaml
    except ImportError:
        logger.warning("PyYAML not installed, cannot load YAML config")
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file."""
    import tomllib

    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(path) as f:
        return json.load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file, detecting format from extension."""
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_yaml_config(path)
    elif suffix == ".toml":
        return load_toml_config(path)
    elif suffix == ".json":
        return load_json_config(path)
    else:
        logger.warning(f"Unknown config file format: {suffix}")
        return {}


ENV_MAPPINGS = {
    "GENERALSTATS_API_BASE_URL": ("api", "base_url"),
    "GENERALSTATS_PAGE_SIZE": ("api", "page_size"),
    "GENERALSTATS_TIMEOUT": ("api", "timeout_seconds"),
    "GENERALSTATS_MAX_PAGES": ("api", "max_pages"),
    "GENERALSTATS_LOG_LEVEL": ("logging", "level"),
    "GENERALSTATS_CHART_WIDTH": ("chart", "width"),
    "GENERALSTATS_CHART_HEIGHT": ("chart", "height"),
    "GENERALSTATS_LINE_COLOR": ("chart", "line_color"),
}


def _coerce_env_value(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    for env_var, (section, key) in ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is not None:
            config.setdefault(section, {})[key] = _coerce_env_value(value)

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def dict_to_config(data: dict[str, Any]) -> GeneralStatsConfig:
    """Convert a dictionary to GeneralStatsConfig. Unknown keys are ignored."""
    config = GeneralStatsConfig()

    for section_name in ("api", "chart", "logging"):
        section = getattr(config, section_name)
        for key, value in data.get(section_name, {}).items():
            if hasattr(section, key):
                setattr(section, key, value)
            else:
                logger.debug(f"Ignoring unknown config key: {section_name}.{key}")

    return config


def load_config(config_file: Path | None = None, include_env: bool = True) -> GeneralStatsConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged GeneralStatsConfig
    """
    config_data: dict[str, Any] = {}

    if config_file:
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    if include_env:
        config_data = merge_configs(config_data, load_env_config())

    return dict_to_config(config_data)


def config_to_dict(config: GeneralStatsConfig) -> dict[str, Any]:
    """Convert GeneralStatsConfig to a dictionary."""
    return asdict(config)


def configure_logging(config: LoggingConfig) -> None:
    """Apply the logging section to the root logger."""
    logging.basicConfig(level=config.level.upper(), format=config.format)
    logging.getLogger().setLevel(config.level.upper())


# ============================================================================
# Global Configuration
# ============================================================================

_global_config: GeneralStatsConfig | None = None


def get_config() -> GeneralStatsConfig:
    """Get the global configuration, loading it if necessary."""
    global _global_config

    if _global_config is None:
        _global_config = load_config()

    return _global_config


def set_config(config: GeneralStatsConfig) -> None:
    """Set the global configuration."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _global_config
    _global_config = None
