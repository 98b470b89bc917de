"""Configuration management for slidefolio."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    'paths': {
        'storage_dir': 'data/images',
        'store_file': 'data/folders.json',
    },
    'ingest': {
        'batch_size': 5,
        'item_delay': 0.1,
        'highlight_mode': 'phrase',
    },
    'settings': {
        'logging': {
            'level': 'INFO',
        },
    },
}


def load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """Load a YAML file and return its contents."""
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def merge_dicts(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries, overlay taking precedence."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


class Config:
    """Configuration manager: built-in defaults overlaid with a YAML file."""

    def __init__(self, config_path: str | Path | None = None):
        """Initialize configuration.

        Args:
            config_path: Path to a YAML configuration file. When None, only
                the built-in defaults are used and paths resolve against
                the current directory.
        """
        if config_path is None:
            self.config_path = None
            self._init_from(copy.deepcopy(DEFAULT_CONFIG), Path.cwd())
        else:
            self.config_path = Path(config_path)
            user_config = load_yaml_file(self.config_path)
            self._init_from(merge_dicts(copy.deepcopy(DEFAULT_CONFIG), user_config),
                            self.config_path.parent)
            logging.debug(f"Loaded config from: {self.config_path}")
        self._setup_logging()

    @classmethod
    def from_dict(cls, main_config: Dict[str, Any], config_dir: Path | None = None) -> "Config":
        """Create a Config from an already loaded dictionary.

        Args:
            main_config: Configuration dictionary (overlays the defaults)
            config_dir: Directory used to resolve ``paths.project_root``

        Returns:
            Configured Config instance
        """
        config = cls.__new__(cls)
        config.config_path = None
        config._init_from(merge_dicts(copy.deepcopy(DEFAULT_CONFIG), main_config),
                          config_dir or Path.cwd())
        config._setup_logging()
        return config

    def _init_from(self, merged: Dict[str, Any], config_dir: Path) -> None:
        self._config = merged
        self._paths = merged.get('paths', {})

        # Set up project_root from paths.project_root if present
        if 'project_root' in self._paths:
            self.project_root = (config_dir / self._paths['project_root']).resolve()
        else:
            self.project_root = config_dir.resolve()

    def _resolve_path_value(self, value: str) -> Path:
        """Resolve a path value relative to project_root if not absolute."""
        p = Path(value).expanduser()
        if not p.is_absolute():
            return self.project_root / p
        return p.resolve()

    def _setup_logging(self):
        """Setup logging based on configuration."""
        log_level = str(self.get('settings.logging.level', 'INFO'))
        numeric_level = getattr(logging, log_level.upper(), logging.INFO)
        logging.basicConfig(
            level=numeric_level,
            format='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        logging.getLogger('slidefolio').setLevel(numeric_level)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'ingest.batch_size')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config
        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def get_path(self, key: str) -> Path:
        """Get a path from configuration, resolved relative to project_root.

        Raises:
            ValueError: If the path key is not configured
        """
        path_str = self._paths.get(key)
        if not path_str:
            raise ValueError(f"Path '{key}' not found in configuration")
        return self._resolve_path_value(path_str)

    @property
    def storage_dir(self) -> Path:
        """Managed image directory."""
        return self.get_path('storage_dir')

    @property
    def store_file(self) -> Path:
        """Persisted folder store."""
        return self.get_path('store_file')

    @property
    def batch_size(self) -> int:
        return int(self.get('ingest.batch_size', 5))

    @property
    def item_delay(self) -> float:
        return float(self.get('ingest.item_delay', 0.1))

    @property
    def highlight_mode(self) -> str:
        """Row text segmentation: 'phrase' or 'words'."""
        return str(self.get('ingest.highlight_mode', 'phrase'))
