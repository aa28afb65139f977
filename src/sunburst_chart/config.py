"""Configuration system for sunburst-chart.

Provides hierarchical configuration with precedence:
1. CLI flags (highest)
2. Environment variables
3. Project config (./.sunburst.json, or the file passed with --config)
4. Global config (~/.sunburst_config.json)
5. Hardcoded defaults (lowest)
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Valid values for enums
VALID_LABEL_MODES = ("category", "value", "percentage")
VALID_DUPLICATE_PATHS = ("overwrite", "sum", "reject")
VALID_LEVEL_ORDERS = ("root-first", "leaf-first")

# Hardcoded defaults
DEFAULT_TITLE = "Sunburst"
DEFAULT_ROOT_LABEL = "Investments"
DEFAULT_LABEL_MODE = "value"
DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 600
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8050

GLOBAL_CONFIG_NAME = ".sunburst_config.json"
PROJECT_CONFIG_NAME = ".sunburst.json"

# Environment variable names
ENV_TITLE = "SUNBURST_TITLE"
ENV_ROOT_LABEL = "SUNBURST_ROOT_LABEL"
ENV_LABEL_MODE = "SUNBURST_LABEL_MODE"
ENV_WIDTH = "SUNBURST_WIDTH"
ENV_HEIGHT = "SUNBURST_HEIGHT"
ENV_DUPLICATE_PATHS = "SUNBURST_DUPLICATE_PATHS"
ENV_LEVEL_ORDER = "SUNBURST_LEVEL_ORDER"
ENV_HOST = "SUNBURST_HOST"
ENV_PORT = "SUNBURST_PORT"

# Deprecated env vars (backward compatibility)
ENV_LABEL_MODE_DEPRECATED = "SUNBURST_LABELS"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigLoadError(Exception):
    """Raised when configuration file cannot be loaded."""

    pass


def _check_unknown(cls: type, data: dict[str, Any], section: str) -> None:
    known_fields = {f.name for f in fields(cls)}
    unknown = set(data.keys()) - known_fields
    if unknown:
        raise ConfigValidationError(
            f"Unknown fields in {section} config: {', '.join(sorted(unknown))}"
        )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigValidationError(
            f"{name} config must be an object, got {type(section).__name__}"
        )
    return section


@dataclass
class ChartConfig:
    """How datasets are aggregated and drawn."""

    title: str | None = None
    root_label: str = DEFAULT_ROOT_LABEL
    label_mode: str = DEFAULT_LABEL_MODE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    duplicate_paths: str = "overwrite"
    level_order: str = "root-first"

    def validate(self) -> None:
        """Validate configuration values."""
        if self.label_mode not in VALID_LABEL_MODES:
            raise ConfigValidationError(
                f"Invalid label_mode '{self.label_mode}'. "
                f"Valid values: {', '.join(VALID_LABEL_MODES)}"
            )
        if self.duplicate_paths not in VALID_DUPLICATE_PATHS:
            raise ConfigValidationError(
                f"Invalid duplicate_paths '{self.duplicate_paths}'. "
                f"Valid values: {', '.join(VALID_DUPLICATE_PATHS)}"
            )
        if self.level_order not in VALID_LEVEL_ORDERS:
            raise ConfigValidationError(
                f"Invalid level_order '{self.level_order}'. "
                f"Valid values: {', '.join(VALID_LEVEL_ORDERS)}"
            )
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigValidationError(f"{name} must be a positive integer, got {value!r}")

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "title": self.title,
            "root_label": self.root_label,
            "label_mode": self.label_mode,
            "width": self.width,
            "height": self.height,
            "duplicate_paths": self.duplicate_paths,
            "level_order": self.level_order,
        }
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "ChartConfig":
        """Create from dictionary."""
        if strict:
            _check_unknown(cls, data, "chart")

        return cls(
            title=data.get("title"),
            root_label=data.get("root_label", DEFAULT_ROOT_LABEL),
            label_mode=data.get("label_mode", DEFAULT_LABEL_MODE),
            width=data.get("width", DEFAULT_WIDTH),
            height=data.get("height", DEFAULT_HEIGHT),
            duplicate_paths=data.get("duplicate_paths", "overwrite"),
            level_order=data.get("level_order", "root-first"),
        )


@dataclass
class ServerConfig:
    """Where the chart page server listens."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def validate(self) -> None:
        if not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigValidationError(f"port must be in 1-65535, got {self.port!r}")

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        return {"host": self.host, "port": self.port}

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "ServerConfig":
        if strict:
            _check_unknown(cls, data, "server")
        return cls(
            host=data.get("host", DEFAULT_HOST),
            port=data.get("port", DEFAULT_PORT),
        )


@dataclass
class SunburstConfig:
    """Main configuration container."""

    version: str = "1"
    chart: ChartConfig = field(default_factory=ChartConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def validate(self) -> None:
        """Validate entire configuration."""
        self.chart.validate()
        self.server.validate()

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "version": self.version,
            "chart": self.chart.to_dict(exclude_none),
            "server": self.server.to_dict(exclude_none),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "SunburstConfig":
        """Create from dictionary."""
        if strict:
            unknown = set(data.keys()) - {"version", "chart", "server"}
            if unknown:
                raise ConfigValidationError(
                    f"Unknown fields in config: {', '.join(sorted(unknown))}"
                )

        return cls(
            version=str(data.get("version", "1")),
            chart=ChartConfig.from_dict(_section(data, "chart"), strict),
            server=ServerConfig.from_dict(_section(data, "server"), strict),
        )


def get_global_config_path() -> Path:
    """Get path to global config file."""
    return Path.home() / GLOBAL_CONFIG_NAME


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get path to project config file."""
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME


def load_config_file(path: Path, strict: bool = False) -> SunburstConfig:
    """Load configuration from a JSON file.

    Args:
        path: Path to the config file
        strict: If True, fail on unknown fields

    Returns:
        SunburstConfig instance (defaults if the file does not exist)

    Raises:
        ConfigLoadError: If file cannot be read or parsed
        ConfigValidationError: If strict=True and unknown fields found
    """
    if not path.exists():
        return SunburstConfig()

    try:
        content = path.read_text()
    except PermissionError as e:
        raise ConfigLoadError(f"Permission denied reading {path}: {e}")
    except OSError as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config in {path} must be a JSON object")

    logger.debug(f"Loaded config from {path}")
    return SunburstConfig.from_dict(data, strict=strict)


def merge_configs(*configs: SunburstConfig) -> SunburstConfig:
    """Merge multiple configs with later configs taking precedence.

    Only values that differ from the hardcoded defaults override earlier
    configs, so partial configs layer properly.

    Args:
        *configs: Configs to merge (first is base, last has highest priority)

    Returns:
        Merged SunburstConfig
    """
    if not configs:
        return SunburstConfig()

    result = copy.deepcopy(configs[0])
    chart_defaults = ChartConfig()
    server_defaults = ServerConfig()

    for config in configs[1:]:
        for f in fields(ChartConfig):
            value = getattr(config.chart, f.name)
            if value is not None and value != getattr(chart_defaults, f.name):
                setattr(result.chart, f.name, value)

        for f in fields(ServerConfig):
            value = getattr(config.server, f.name)
            if value != getattr(server_defaults, f.name):
                setattr(result.server, f.name, value)

        if config.version != "1":
            result.version = config.version

    return result


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigValidationError(f"{name} must be an integer, got '{raw}'")


def apply_env_overrides(config: SunburstConfig) -> SunburstConfig:
    """Apply environment variable overrides to config.

    Args:
        config: Base configuration

    Returns:
        New config with env var overrides applied

    Raises:
        ConfigValidationError: If env var value is invalid
    """
    result = copy.deepcopy(config)

    deprecated_mode = os.environ.get(ENV_LABEL_MODE_DEPRECATED)
    if deprecated_mode and not os.environ.get(ENV_LABEL_MODE):
        logger.warning(
            f"{ENV_LABEL_MODE_DEPRECATED} is deprecated. "
            f"Use {ENV_LABEL_MODE} instead."
        )
        result.chart.label_mode = deprecated_mode.lower()

    if title := os.environ.get(ENV_TITLE):
        result.chart.title = title

    if root_label := os.environ.get(ENV_ROOT_LABEL):
        result.chart.root_label = root_label

    if label_mode := os.environ.get(ENV_LABEL_MODE):
        result.chart.label_mode = label_mode.lower()

    if duplicate_paths := os.environ.get(ENV_DUPLICATE_PATHS):
        result.chart.duplicate_paths = duplicate_paths.lower()

    if level_order := os.environ.get(ENV_LEVEL_ORDER):
        result.chart.level_order = level_order.lower()

    if (width := _env_int(ENV_WIDTH)) is not None:
        result.chart.width = width

    if (height := _env_int(ENV_HEIGHT)) is not None:
        result.chart.height = height

    if host := os.environ.get(ENV_HOST):
        result.server.host = host

    if (port := _env_int(ENV_PORT)) is not None:
        result.server.port = port

    return result


def get_config(config_path: Path | None = None) -> SunburstConfig:
    """Load and merge configuration from all sources.

    Loads in order (later sources override earlier):
    1. Hardcoded defaults
    2. Global config (~/.sunburst_config.json)
    3. Project config (config_path, or ./.sunburst.json)
    4. Environment variables

    Args:
        config_path: Explicit project config file

    Returns:
        Merged and validated configuration
    """
    base_config = SunburstConfig()
    global_config = load_config_file(get_global_config_path())

    if config_path is not None:
        if not config_path.exists():
            raise ConfigLoadError(f"Config file not found: {config_path}")
        project_config = load_config_file(config_path)
    else:
        project_config = load_config_file(get_project_config_path())

    merged = merge_configs(base_config, global_config, project_config)
    result = apply_env_overrides(merged)
    result.validate()
    return result


def generate_config_template() -> dict[str, Any]:
    """Generate a config template with every option at its default."""
    return SunburstConfig().to_dict()


def generate_config_template_string() -> str:
    """Config template as formatted JSON."""
    return json.dumps(generate_config_template(), indent=2)
