"""
JSON-based project configuration for polysoup.

Config file search (first match wins, files are not layered):
1. Explicit config path
2. .polysoup.json next to the mesh file
3. .polysoup.json in the current working directory
4. ~/.polysoup.json in the user's home directory

If nothing is found, built-in defaults (dataclasses below) are used.
load_obj() does not search by itself: pass it the result of load_config().
To layer two configs explicitly, use merge_configs().

Example .polysoup.json:
{
    "importer": {
        "precision": "float32",
        "default_patch_name": "_DEFAULT",
        "encoding": "utf-8",
        "validate_references": true
    },
    "logging": {
        "level": "DEBUG",
        "json_file": "polysoup.log.json",
        "use_colors": false
    }
}
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from polysoup.geometry.scalar import resolve_dtype
from polysoup.logging_config import setup_logging
from polysoup.mesh.primitives import DEFAULT_PATCH_NAME

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".polysoup.json"


@dataclass
class ImportConfig:
    """Mesh importer options."""
    precision: str = "float64"  # float32 | float64 | single | double
    default_patch_name: str = DEFAULT_PATCH_NAME
    encoding: str = "utf-8"
    validate_references: bool = True

    @property
    def dtype(self) -> np.dtype:
        """Scalar dtype for the configured precision."""
        return resolve_dtype(self.precision)


@dataclass
class LoggingConfig:
    """Logging output options."""
    level: str = "INFO"
    json_file: Optional[str] = None
    use_colors: bool = True

    @property
    def level_number(self) -> int:
        """Numeric logging level (unknown names fall back to INFO)."""
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.INFO


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    importer: ImportConfig = field(default_factory=ImportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create configuration from dictionary.

        Unknown sections and keys are ignored.
        """
        config = cls()
        for section in fields(config):
            values = data.get(section.name)
            if not isinstance(values, dict):
                continue
            target = getattr(config, section.name)
            for key, value in values.items():
                if hasattr(target, key) and not key.startswith('_'):
                    setattr(target, key, value)
        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'ProjectConfig':
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ProjectConfig':
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.info("Configuration loaded from %s", path)
        return cls.from_dict(data)


def find_config_file(
    mesh_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Find configuration file using search hierarchy.

    Search order:
    1. Explicit config path (if provided)
    2. .polysoup.json in the mesh file's directory
    3. .polysoup.json in current working directory
    4. ~/.polysoup.json in user's home directory

    Returns:
        Path to config file if found, None otherwise
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    candidates = []
    if mesh_path:
        candidates.append(Path(mesh_path).parent / CONFIG_FILENAME)
    candidates.append(Path.cwd() / CONFIG_FILENAME)
    candidates.append(Path.home() / CONFIG_FILENAME)

    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def load_config(
    mesh_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> ProjectConfig:
    """Load configuration with fallback to defaults."""
    config_path = find_config_file(mesh_path, explicit_config)

    if config_path:
        try:
            return ProjectConfig.load(config_path)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return ProjectConfig()


def merge_configs(base: ProjectConfig, override: ProjectConfig) -> ProjectConfig:
    """Merge two configurations, with override taking precedence.

    Only values of override that differ from the built-in defaults are
    applied.
    """
    merged = ProjectConfig.from_dict(base.to_dict())
    defaults = ProjectConfig()

    for section in fields(ProjectConfig):
        default_section = getattr(defaults, section.name)
        for key, value in asdict(getattr(override, section.name)).items():
            if value != getattr(default_section, key):
                setattr(getattr(merged, section.name), key, value)

    return merged


def apply_logging_config(config: ProjectConfig) -> logging.Logger:
    """Configure package logging from the config's logging section."""
    log_cfg = config.logging
    return setup_logging(
        level=log_cfg.level_number,
        json_file=log_cfg.json_file,
        use_colors=log_cfg.use_colors,
    )
