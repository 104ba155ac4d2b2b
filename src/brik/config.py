"""
Brik Configuration

Loads configuration from a YAML file or environment variables.
Controls where compiled trees are written and how they are laid out.
"""

import codecs
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".brik" / "brik_config.yaml",
    Path("brik.yaml"),
]


DEFAULT_CONFIG = {
    # Compiled tree location
    "output_dir": "build",
    "output_name": "arbol.ast",

    # Tree layout
    "indent_size": 2,

    # `brik tokens` preview length
    "token_preview": 30,

    "log_level": "WARNING",

    # Tried in order when reading sources
    "source_encodings": ["utf-8-sig", "utf-8", "latin-1"],
}


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """A configuration value that cannot be used."""


def check_log_level(level: Any) -> str:
    """Normalize a log level name, raising ConfigError for unknown names."""
    name = str(level).strip().upper()
    if name not in LOG_LEVELS:
        raise ConfigError(
            f"unknown log level {level!r} (expected one of {', '.join(LOG_LEVELS)})"
        )
    return name


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None
    if number < 0:
        raise ConfigError(f"{key} must not be negative, got {number}")
    return number


class BrikConfig:
    """Configuration for the compiler front end."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        # Load from file if found
        self._load_config(config_path)

        # Override with environment variables
        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if not config_path.exists():
                if explicit_path:
                    logger.warning("Config file not found: %s", config_path)
                continue
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    user_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Failed to load config from %s: %s", config_path, e)
                continue
            if not isinstance(user_config, dict):
                logger.warning("Ignoring config %s: expected a mapping, got %s",
                               config_path, type(user_config).__name__)
                continue
            self._config.update(user_config)
            self._config_path = config_path
            logger.debug("Loaded config from %s", config_path)
            return

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "BRIK_OUTPUT_DIR": "output_dir",
            "BRIK_OUTPUT_NAME": "output_name",
            "BRIK_INDENT_SIZE": "indent_size",
            "BRIK_LOG_LEVEL": "log_level",
        }

        for env_var, config_key in env_mappings.items():
            if env_var in os.environ:
                self._config[config_key] = os.environ[env_var]

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def output_dir(self) -> Path:
        value = self._config.get("output_dir")
        if not isinstance(value, (str, Path)) or not str(value):
            raise ConfigError(f"output_dir must be a path, got {value!r}")
        return Path(value)

    @property
    def output_name(self) -> str:
        value = self._config.get("output_name")
        if value is None or not str(value):
            raise ConfigError(f"output_name must be a file name, got {value!r}")
        return str(value)

    @property
    def output_path(self) -> Path:
        """Default destination for `brik compile`."""
        return self.output_dir / self.output_name

    @property
    def indent_size(self) -> int:
        """Spaces per nesting level in the tree text."""
        return _positive_int("indent_size", self._config.get("indent_size", 2))

    @property
    def token_preview(self) -> int:
        return _positive_int("token_preview", self._config.get("token_preview", 30))

    @property
    def log_level(self) -> str:
        return check_log_level(self._config.get("log_level", "WARNING"))

    @property
    def source_encodings(self) -> List[str]:
        """Encodings tried in order; a single name is accepted as a one-item list."""
        encodings = self._config.get("source_encodings") or DEFAULT_CONFIG["source_encodings"]
        if isinstance(encodings, str):
            encodings = [encodings]
        if not isinstance(encodings, (list, tuple)):
            raise ConfigError(f"source_encodings must be a list of names, got {encodings!r}")
        for name in encodings:
            try:
                codecs.lookup(str(name))
            except LookupError:
                raise ConfigError(f"unknown source encoding {name!r}") from None
        return [str(name) for name in encodings]

    def validate(self) -> None:
        """Check every typed setting, raising ConfigError on the first bad one."""
        for key in ("output_dir", "output_name", "indent_size", "token_preview",
                    "log_level", "source_encodings"):
            getattr(self, key)

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "output_dir": str(self.output_dir),
            "output_name": self.output_name,
            "indent_size": self.indent_size,
            "token_preview": self.token_preview,
            "log_level": self.log_level,
            "source_encodings": self.source_encodings,
            "config_file": str(self._config_path) if self._config_path else None,
        }


# Global config instance (lazy-loaded)
_config: Optional[BrikConfig] = None


def get_config(config_path: Optional[Path] = None) -> BrikConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = BrikConfig(config_path)
    return _config


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns the path where config was written.
    """
    if path is None:
        path = Path.home() / ".brik" / "brik_config.yaml"

    path.parent.mkdir(parents=True, exist_ok=True)

    config_content = """# Brik Configuration
#
# You can override any setting here or via environment variables
# (BRIK_OUTPUT_DIR, BRIK_OUTPUT_NAME, BRIK_INDENT_SIZE, BRIK_LOG_LEVEL).

# Where `brik compile` writes the tree
output_dir: "build"
output_name: "arbol.ast"

# Spaces per nesting level in the tree text
indent_size: 2

# Number of tokens listed by `brik tokens`
token_preview: 30

# DEBUG, INFO, WARNING, ERROR
log_level: "WARNING"

# Encodings tried in order when reading .brik files
source_encodings:
  - "utf-8-sig"
  - "utf-8"
  - "latin-1"
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(config_content)

    return path
