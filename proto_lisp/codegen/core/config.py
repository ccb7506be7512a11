"""
Generator settings.

Settings come from three layers, later ones winning: built-in defaults,
an optional JSON settings file, and explicit overrides (usually CLI flags).
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict


class ConfigError(Exception):
    """A settings file is missing, unreadable or not a JSON object."""
    pass


@dataclass
class GeneratorConfig:
    """Settings for one generator run."""

    # Where the CLI writes files; None means the working directory
    output_dir: Optional[str] = None
    file_extension: str = ".lisp"

    # Spaces per nesting level inside declarations
    indent_size: int = 2

    # Emit the #+sbcl optimize declaim at the top of each file
    sbcl_optimize: bool = True

    # Section comments (";;; Top-Level enums" and friends)
    add_comments: bool = True

    # Replaces the Lisp package derived from the proto package
    package_override: Optional[str] = None

    # Keys the generator does not know, kept for callers
    custom: Dict[str, Any] = field(default_factory=dict)


DEFAULT_CONFIG: Dict[str, Any] = {
    "file_extension": ".lisp",
    "indent_size": 2,
    "sbcl_optimize": True,
    "add_comments": True,
}


class ConfigManager:
    """Loads, merges, validates and saves generator settings."""

    def __init__(self):
        self._defaults: Dict[str, Any] = dict(DEFAULT_CONFIG)

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Merge defaults, a settings file and overrides into one config.

        Args:
            custom_config: Overrides applied last
            config_file: JSON settings file applied over the defaults

        Returns:
            The merged GeneratorConfig

        Raises:
            ConfigError: The settings file cannot be used
        """
        merged = self._defaults.copy()

        if config_file:
            merged.update(self._load_config_file(config_file))

        if custom_config:
            merged.update(custom_config)

        return self._dict_to_config(merged)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with path.open('r', encoding='utf-8') as f:
                settings = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(settings, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return settings

    def _dict_to_config(self, settings: Dict[str, Any]) -> GeneratorConfig:
        """Split settings into GeneratorConfig fields and the custom dict."""
        field_names = set(GeneratorConfig.__dataclass_fields__)

        known = {k: v for k, v in settings.items() if k in field_names}
        unknown = {k: v for k, v in settings.items() if k not in field_names}

        if unknown:
            known['custom'] = {**known.get('custom', {}), **unknown}

        return GeneratorConfig(**known)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Write settings as a flat JSON object that get_config reads back."""
        path = Path(output_path)

        settings = asdict(config)
        settings.update(settings.pop("custom"))

        try:
            with path.open('w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Check settings that would produce odd output without failing.

        Returns:
            Human-readable warnings, empty when the config looks sane
        """
        problems = []

        if not isinstance(config.indent_size, int) or config.indent_size < 0:
            problems.append(f"Invalid indent_size: {config.indent_size}")

        if not config.file_extension.startswith("."):
            problems.append(f"file_extension should start with '.': {config.file_extension}")

        if config.package_override is not None and not config.package_override.strip():
            problems.append("package_override is blank; files will get no Lisp package")

        return problems


_config_manager = None

def get_config_manager() -> ConfigManager:
    """Process-wide ConfigManager, created on first use."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """Shortcut for ``get_config_manager().get_config(...)``."""
    return get_config_manager().get_config(custom_config, config_file)
