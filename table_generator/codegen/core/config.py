"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields, asdict

from .naming import is_identifier, is_namespace


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_file: Optional[str] = None
    namespace: str = "TableGenerator"
    add_using_directives: bool = True

    # Code style settings
    indent_size: int = 4
    partial_class: bool = True

    # Rendering mode: property blocks with change notification, or
    # plain auto-properties
    emit_change_notification: bool = True
    change_notification_method: str = "RaisePropertyChanged"

    # Type handling
    track_nullability: bool = True
    type_overrides: Dict[str, str] = field(default_factory=dict)
    nullable_type_overrides: Dict[str, str] = field(default_factory=dict)

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


# Rich variant: nullable-aware types plus INotifyPropertyChanged boilerplate
PROPERTY_STYLE_CONFIG = {
    "emit_change_notification": True,
    "track_nullability": True,
}

# Simple variant: auto-properties, every column treated as non-nullable
SIMPLE_CONFIG = {
    "emit_change_notification": False,
    "track_nullability": False,
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["csharp"] = {
            "namespace": "TableGenerator",
            "partial_class": True,
            "add_using_directives": True,
            "indent_size": 4,
            **PROPERTY_STYLE_CONFIG,
            "change_notification_method": "RaisePropertyChanged",
        }

    def get_config(
        self,
        language: str = "csharp",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = dict(self._configs.get(language.lower(), {}))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        # Apply custom overrides
        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
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
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Add custom fields to the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        # Override tables are keyed by the normalized native type name
        for key in ("type_overrides", "nullable_type_overrides"):
            if key in config_args:
                overrides = config_args[key]
                if not isinstance(overrides, dict):
                    raise ConfigError(f"{key} must be an object, got {overrides!r}")
                config_args[key] = {
                    str(native).lower(): target for native, target in overrides.items()
                }

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def list_languages(self) -> list[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, strict: bool = False) -> list[str]:
        """
        Validate a configuration.

        An invalid namespace, notification method or indent would end up
        verbatim in the generated code. In strict mode these raise instead
        of being reported as warnings.

        Returns:
            List of validation warnings

        Raises:
            ConfigError: In strict mode, if a setting would corrupt the output
        """
        errors = []

        if not is_namespace(config.namespace):
            errors.append(f"Invalid namespace: {config.namespace!r}")

        if config.emit_change_notification and not is_identifier(
            config.change_notification_method
        ):
            errors.append(
                f"Invalid change notification method: {config.change_notification_method!r}"
            )

        if config.indent_size < 0:
            errors.append(f"Invalid indent_size: {config.indent_size}")

        if strict and errors:
            raise ConfigError("; ".join(errors))

        warnings = list(errors)
        for key in ("type_overrides", "nullable_type_overrides"):
            for native in getattr(config, key):
                if "(" in native or native != native.strip():
                    warnings.append(
                        f"{key} key {native!r} is not a bare type name and will never match"
                    )

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "csharp",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
