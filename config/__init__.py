"""
Configuration Module for the Ledger OCR Engine.

Settings live in ``config/settings.yaml`` and are grouped by the stage that
reads them:

    - ocr: backend name and Tesseract options (lang, psm, oem)
    - parser: party-name scan window, item limits, total heuristics
    - pipeline: placeholder names for empty recognitions
    - output: JSON indentation and Excel sheet layout
    - logging: level, format, optional rotating log file

Author: ML Engineering Team
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from ledger_ocr.utils.exceptions import ConfigurationError


class ConfigurationManager:
    """
    Process-wide access to the ledger OCR settings.

    The first instantiation loads the YAML file; later ones return the same
    object. Relative entries under ``paths`` are resolved against the
    project root, so ``paths.output_dir`` is always absolute.

    Attributes:
        config_path (Path): Path to the settings file.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("parser.items.max_rate")
        1000000
        >>> config.get("pipeline.empty_item_name")
        'Item 1'
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load the settings once.

        Args:
            config_path: Settings file; defaults to config/settings.yaml.
                        Ignored after the first instantiation until reset().
        """
        if self._initialized:
            return

        if config_path is None:
            self.config_path = Path(__file__).parent / "settings.yaml"
        else:
            self.config_path = Path(config_path)

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """
        Read and validate the settings file.

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML,
                or its top level is not a mapping of setting groups.
        """
        if not self.config_path.exists():
            raise ConfigurationError(str(self.config_path), "file not found")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(str(self.config_path), f"invalid YAML: {e}") from e

        loaded = loaded or {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                str(self.config_path), "top level must be a mapping of setting groups"
            )

        self._config = loaded
        self._resolve_paths()

    def _resolve_paths(self) -> None:
        """Make relative ``paths.*`` entries absolute under the project root."""
        project_root = Path(__file__).parent.parent

        if 'paths' in self._config:
            for key, value in self._config['paths'].items():
                if value and not Path(value).is_absolute():
                    self._config['paths'][key] = str(project_root / value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting using dot notation.

        Args:
            key: Dotted key, e.g. "parser.total.tail_lines" or "ocr.tesseract.psm".
            default: Returned when any part of the key is missing.

        Returns:
            Setting value or default.

        Example:
            >>> config.get("parser.party.scan_lines")
            5
            >>> config.get("parser.items.unknown", 42)
            42
        """
        keys = key.split('.')
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_all(self) -> Dict[str, Any]:
        """Shallow copy of every setting group."""
        return self._config.copy()

    def reload(self) -> None:
        """Re-read the settings file, e.g. after editing parser thresholds."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings so the next instantiation reads a file again."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Shortcut for ``ConfigurationManager().get(key, default)``.

    Used by the parser, OCR engine, pipeline and exporters to read their
    defaults, e.g. ``get_config("output.json.indent", 2)``.
    """
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
