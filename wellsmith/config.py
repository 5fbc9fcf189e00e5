"""Configuration for WellSmith.

Configuration is a nested dictionary addressed with dotted keys, e.g.
``config.get("physics.gravity")``. Files are YAML or JSON and are merged
over the defaults, so they only need the keys they change.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "physics": {
        "gravity": 9.80665,
    },
    "geometry": {
        "boundary_tolerance": 1e-6,
    },
    "fluids": {
        "base_annulus_density": 1260.0,
        "base_string_density": 1260.0,
        "base_color": "#808080",
    },
    "mixing": {
        "barite_density": 4250.0,
        "sack_mass": 40.0,
    },
    "validation": {
        "strict": False,
    },
    "logging": {
        "level": "WARNING",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigManager:
    """Dotted-key access to a nested configuration dictionary.

    Example:
        >>> config = ConfigManager({"physics": {"gravity": 9.81}})
        >>> config.get("physics.gravity")
        9.81
        >>> config.get("fluids.base_annulus_density")
        1260.0
    """

    def __init__(self, values: Optional[dict[str, Any]] = None):
        """Initialize from defaults, overridden by ``values``."""
        self._values = _deep_merge(DEFAULT_CONFIG, values or {})

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dotted key, or ``default`` if any part is missing."""
        node: Any = self._values
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Set the value at a dotted key, creating sections as needed."""
        parts = key.split(".")
        node = self._values
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value

    def update(self, values: dict[str, Any]) -> None:
        """Deep-merge ``values`` into the configuration."""
        self._values = _deep_merge(self._values, values)

    def to_dict(self) -> dict[str, Any]:
        """Copy of the full configuration."""
        return copy.deepcopy(self._values)

    def __contains__(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def __repr__(self) -> str:
        """String representation."""
        return f"ConfigManager(sections={sorted(self._values)})"


def load_config(path: Union[str, Path]) -> ConfigManager:
    """Load configuration from a YAML or JSON file.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file.

    Returns:
        ConfigManager with the file merged over the defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the format is unsupported or the file is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in (".yaml", ".yml"):
            values = yaml.safe_load(f)
        elif suffix == ".json":
            values = json.load(f)
        else:
            raise ValueError(
                f"Unsupported config file format: {suffix}. Use .yaml, .yml, or .json"
            )

    values = values or {}
    if not isinstance(values, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    logger.info(f"Loaded config from {path}")
    return ConfigManager(values)


_default_config: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """Process-wide default configuration."""
    global _default_config
    if _default_config is None:
        _default_config = ConfigManager()
    return _default_config


def set_config(config: Optional[ConfigManager]) -> None:
    """Replace the process-wide default configuration (``None`` resets it)."""
    global _default_config
    _default_config = config


def configure_logging(config: Optional[ConfigManager] = None) -> None:
    """Apply ``logging.level`` to the ``wellsmith`` logger."""
    config = config or get_config()
    level = str(config.get("logging.level", "WARNING")).upper()
    logging.getLogger("wellsmith").setLevel(getattr(logging, level, logging.WARNING))
