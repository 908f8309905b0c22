"""Configuration loading and management for linetally.

Configuration sources are merged in priority order:
    1. Defaults (defined in CountConfig)
    2. Global config (~/.linetally.toml)
    3. Project config (./linetally.toml)
    4. Explicit config file
    5. Environment variables (LINETALLY_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4, verbose=True)
    >>> config.verbosity
    'verbose'
    >>> config.concurrency_cap
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

GLOBAL_CONFIG_NAME = ".linetally.toml"
PROJECT_CONFIG_NAME = "linetally.toml"
ENV_PREFIX = "LINETALLY_"


def default_concurrency() -> int:
    """Hardware parallelism minus one slot for the driver thread, at least 1.

    When the CPU count cannot be determined the cap falls back to 1.
    """
    cpu_count = os.cpu_count()
    if not cpu_count:
        return 1
    return max(1, cpu_count - 1)


@dataclass(frozen=True)
class CountConfig:
    """Configuration for one line-count scan.

    Attributes:
        workers: Maximum number of in-flight tasks, discovery included
            (None = hardware parallelism minus one)
        poll_interval_seconds: How long the driver waits for a task to finish
            before re-checking the pool (0 = pure polling)
        chunk_size: Bytes read per call while counting newlines
        verbosity: Logging verbosity level
        log_file: Optional file that receives a copy of the log
    """

    workers: Optional[int] = None
    poll_interval_seconds: float = 0.05
    chunk_size: int = 1024 * 1024
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.poll_interval_seconds < 0:
            raise InvalidConfigError(
                "poll_interval_seconds", self.poll_interval_seconds, "must be non-negative"
            )
        if self.chunk_size < 1:
            raise InvalidConfigError("chunk_size", self.chunk_size, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be one of quiet, normal, verbose"
            )

    @property
    def concurrency_cap(self) -> int:
        """Resolved task cap."""
        return self.workers if self.workers is not None else default_concurrency()


def load_config(config_file: Optional[Path] = None, **overrides) -> CountConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated CountConfig instance

    Raises:
        ConfigurationError: If a config file or environment value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CountConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from LINETALLY_* environment variables.

    Supported environment variables:
        LINETALLY_WORKERS: int
        LINETALLY_POLL_INTERVAL_SECONDS: float
        LINETALLY_CHUNK_SIZE: int
        LINETALLY_VERBOSITY: quiet/normal/verbose
        LINETALLY_LOG_FILE: path
    """
    type_hints = get_type_hints(CountConfig)

    result: dict[str, Any] = {}

    for field_name in CountConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]; unwrap to X
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Accepts either top-level keys or a ``[linetally]`` table.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("linetally")
    if isinstance(section, dict):
        return section
    return data
