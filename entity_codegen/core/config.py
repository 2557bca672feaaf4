"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Code style settings
    indent_size: int = 2
    line_ending: str = "\n"

    # Output layout
    model_dir: str = "./model"
    file_extension: str = ".ts"

    # Naming settings
    navigation_prefix: str = "otm_"

    # Type handling, keyed by "kind.subtype"
    type_overrides: Dict[str, str] = field(default_factory=dict)

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["typeorm"] = {
            "indent_size": 2,
            "line_ending": "\n",
            "model_dir": "./model",
            "file_extension": ".ts",
            "navigation_prefix": "otm_",
            "custom": {
                "orm_module": "typeorm",
                "base_entity": "BaseEntity",
            },
        }

    def get_config(self, target: str = "typeorm",
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            target: Target framework name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        # Start with defaults, copying nested dicts so they are never shared
        defaults = self._configs.get(target, {})
        base_config = {
            key: dict(value) if isinstance(value, dict) else value
            for key, value in defaults.items()
        }

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
        """Shallow merge, except nested dicts which are merged key by key."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = {**base[key], **value}
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in GeneratorConfig.__dataclass_fields__.values()}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def list_targets(self) -> list[str]:
        """Get list of targets with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(config.indent_size, int) or config.indent_size < 0:
            errors.append(f"Invalid indent_size: {config.indent_size}")

        if config.line_ending not in {"\n", "\r\n"}:
            errors.append(f"Invalid line_ending: {config.line_ending!r}")

        # Cross-file imports climb two levels from <model_dir>/<kind>/
        segments = config.model_dir.split("/")
        if len(segments) != 2 or segments[0] != "." or not segments[1]:
            errors.append(f"model_dir must be a single './<name>' directory: {config.model_dir}")

        if config.file_extension and not config.file_extension.startswith("."):
            errors.append(f"file_extension must start with '.': {config.file_extension}")

        if not config.navigation_prefix or not config.navigation_prefix.isidentifier():
            errors.append(f"Invalid navigation_prefix: {config.navigation_prefix!r}")

        for key in config.type_overrides:
            if key.count(".") != 1:
                errors.append(f"type_overrides key must be 'kind.subtype': {key}")

        return errors


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(target: str = "typeorm",
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        target: Target framework name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target

    Raises:
        ConfigError: If the file is unusable or the merged values are invalid
    """
    manager = get_config_manager()
    config = manager.get_config(target, custom_config, config_file)

    errors = manager.validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))

    return config


# Example configuration file for reference
EXAMPLE_TYPEORM_CONFIG = {
    "model_dir": "./model",
    "indent_size": 2,
    "type_overrides": {"common.timestamp": "Date"},
}
