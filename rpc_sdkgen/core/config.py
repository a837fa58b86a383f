"""
Configuration management for SDK generation.

Handles generator settings (package metadata, exposure channel, output
options) with per-language defaults and JSON config files, plus the
class/method exposure configuration that decides which methods reach
the generated proxy.
"""

import json
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class TriggerType(Enum):
    """Channels a class method can be exposed on."""

    JSONRPC = "jsonrpc"
    HTTP = "http"
    CRON = "cron"


@dataclass(frozen=True)
class MethodConfiguration:
    name: str
    type: TriggerType = TriggerType.JSONRPC


@dataclass(frozen=True)
class ClassConfiguration:
    """Exposure configuration of one deployed class."""

    path: str
    type: TriggerType = TriggerType.JSONRPC
    methods: Tuple[MethodConfiguration, ...] = ()
    name: Optional[str] = None

    def get_method_type(self, method_name: str) -> TriggerType:
        """Return the method's trigger, falling back to the class trigger."""
        for method in self.methods:
            if method.name == method_name:
                return method.type
        return self.type

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassConfiguration":
        """Build a class configuration from its YAML/JSON form."""
        if "path" not in data:
            raise ConfigError("Class configuration requires a 'path'")
        try:
            return cls(
                path=data["path"],
                type=TriggerType(data.get("type", "jsonrpc")),
                methods=tuple(
                    MethodConfiguration(m["name"], TriggerType(m.get("type", data.get("type", "jsonrpc"))))
                    for m in data.get("methods", [])
                ),
                name=data.get("name"),
            )
        except (KeyError, ValueError) as e:
            raise ConfigError(f"Invalid class configuration for {data['path']}: {e}") from e


@dataclass
class GeneratorConfig:
    """Base configuration for SDK generators."""

    # Package metadata
    package_name: Optional[str] = None
    package_version: Optional[str] = None

    # Channel the generated SDK talks to
    channel: str = TriggerType.JSONRPC.value

    # Value substituted for the transport stub's endpoint marker;
    # None keeps the language's null literal
    stub_url: Optional[str] = None

    # Output settings
    add_comments: bool = True
    line_ending: str = "\n"

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def trigger(self) -> TriggerType:
        try:
            return TriggerType(self.channel)
        except ValueError as e:
            raise ConfigError(f"Unknown channel: {self.channel}") from e


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["typescript"] = {
            "channel": "jsonrpc",
            "add_comments": True,
            "custom": {"indent": 2},
        }

        self._configs["python"] = {
            "channel": "jsonrpc",
            "add_comments": True,
            "custom": {"indent": 4},
        }

        self._configs["dart"] = {
            "channel": "jsonrpc",
            "add_comments": True,
            "custom": {"indent": 2},
        }

    def get_config(
        self,
        language: str,
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
        base_config = json.loads(json.dumps(self._configs.get(language, {})))

        # Load from file if provided
        if config_file:
            base_config = self._merge(base_config, self._load_config_file(config_file))

        # Apply custom overrides
        if custom_config:
            base_config = self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        merged = dict(base)
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                merged["custom"] = {**merged.get("custom", {}), **value}
            else:
                merged[key] = value
        return merged

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
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
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

        # Unknown keys are language-specific settings
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            "package_name": config.package_name,
            "package_version": config.package_version,
            "channel": config.channel,
            "stub_url": config.stub_url,
            "add_comments": config.add_comments,
            "line_ending": config.line_ending,
        }
        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def list_languages(self) -> List[str]:
        """Get list of languages with defaults."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.channel not in {t.value for t in TriggerType}:
            warnings.append(f"Invalid channel: {config.channel}")

        if config.line_ending not in {"\n", "\r\n"}:
            warnings.append(f"Invalid line_ending: {config.line_ending!r}")

        indent = config.custom.get("indent", 2)
        if not isinstance(indent, int) or indent < 1:
            warnings.append(f"Invalid indent: {indent}")

        # Language-specific validations
        name = config.package_name
        if name:
            if language == "python" and not name.replace("-", "_").isidentifier():
                warnings.append(f"Invalid Python package name: {name}")
            elif language == "dart" and not re.fullmatch(r"[a-z][a-z0-9_]*", name):
                warnings.append(f"Dart package names must be lowercase_with_underscores: {name}")
            elif language == "typescript" and not re.fullmatch(r"(@[a-z0-9~-][a-z0-9._~-]*/)?[a-z0-9~-][a-z0-9._~-]*", name):
                warnings.append(f"Invalid npm package name: {name}")

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
    language: str,
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
