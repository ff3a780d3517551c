"""
Configuration system for HotRefactor

Provides configuration management with support for files and environment variables.
Includes validation, default value handling, and configuration merging.
"""

import os
import json
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

VALID_DIRECT_TARGETS = ["public", "protected", "internal", "private"]
VALID_LINE_TERMINATORS = ["auto", "lf", "crlf"]
KNOWN_PROVIDERS = ["change_modifier", "using_groups"]


class ConfigurationManager:
    """Manages configuration loading, validation, and merging."""

    DEFAULT_CONFIG_PATHS = [
        "hotrefactor.json",
        "hotrefactor.yaml",
        "hotrefactor.yml",
        ".hotrefactor.json",
        ".hotrefactor.yaml",
        ".hotrefactor.yml",
        os.path.expanduser("~/.hotrefactor.json"),
        os.path.expanduser("~/.hotrefactor.yaml"),
    ]

    @staticmethod
    def find_config_file(search_paths: Optional[List[str]] = None) -> Optional[str]:
        """Find the first existing configuration file."""
        paths = search_paths or ConfigurationManager.DEFAULT_CONFIG_PATHS

        for path in paths:
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def load_config_file(config_path: str) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.endswith((".yaml", ".yml")):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")
        return data

    @staticmethod
    def load_env_config() -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        modifiers = {}
        if os.getenv("HOTREFACTOR_DIRECT_TARGETS") is not None:
            modifiers["direct_replacement_targets"] = [
                item.strip().lower()
                for item in os.getenv("HOTREFACTOR_DIRECT_TARGETS").split(",")
                if item.strip()
            ]

        if modifiers:
            config["modifiers"] = modifiers

        using_groups = {}
        if os.getenv("HOTREFACTOR_LINE_TERMINATOR"):
            terminator = os.getenv("HOTREFACTOR_LINE_TERMINATOR").lower()
            if terminator in VALID_LINE_TERMINATORS:
                using_groups["line_terminator"] = terminator
            else:
                logger.warning("Invalid HOTREFACTOR_LINE_TERMINATOR value, using default")

        if using_groups:
            config["using_groups"] = using_groups

        host = {}
        if os.getenv("HOTREFACTOR_MAX_FILE_SIZE"):
            try:
                host["max_file_size"] = int(os.getenv("HOTREFACTOR_MAX_FILE_SIZE"))
            except ValueError:
                logger.warning("Invalid HOTREFACTOR_MAX_FILE_SIZE value, using default")

        if host:
            config["host"] = host

        providers = {}
        if os.getenv("HOTREFACTOR_ENABLED_PROVIDERS"):
            providers["enabled_providers"] = [
                item.strip()
                for item in os.getenv("HOTREFACTOR_ENABLED_PROVIDERS").split(",")
                if item.strip()
            ]

        if providers:
            config["providers"] = providers

        return config

    @staticmethod
    def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries, with later ones taking precedence."""
        result = {}

        for config in configs:
            if not config:
                continue

            for key, value in config.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = ConfigurationManager.merge_configs(result[key], value)
                else:
                    result[key] = value

        return result

    @staticmethod
    def validate_config(config_data: Dict[str, Any]) -> None:
        """Validate configuration data."""
        for section in ("modifiers", "using_groups", "host", "providers"):
            if section in config_data and not isinstance(config_data[section], dict):
                raise ConfigurationError(f"Configuration section '{section}' must be a mapping")

        if "modifiers" in config_data:
            modifiers = config_data["modifiers"]

            if "direct_replacement_targets" in modifiers:
                targets = modifiers["direct_replacement_targets"]
                if not isinstance(targets, list):
                    raise ConfigurationError("direct_replacement_targets must be a list")
                for target in targets:
                    if target not in VALID_DIRECT_TARGETS:
                        raise ConfigurationError(
                            f"direct_replacement_targets entries must be one of: {VALID_DIRECT_TARGETS}"
                        )

        if "using_groups" in config_data:
            using_groups = config_data["using_groups"]

            if "line_terminator" in using_groups:
                if using_groups["line_terminator"] not in VALID_LINE_TERMINATORS:
                    raise ConfigurationError(
                        f"line_terminator must be one of: {VALID_LINE_TERMINATORS}"
                    )

        if "host" in config_data:
            host = config_data["host"]

            if "max_file_size" in host:
                size = host["max_file_size"]
                if not isinstance(size, int) or size <= 0:
                    raise ConfigurationError("max_file_size must be positive")

        if "providers" in config_data:
            providers = config_data["providers"]

            if "enabled_providers" in providers:
                if not isinstance(providers["enabled_providers"], list):
                    raise ConfigurationError("enabled_providers must be a list")
                for name in providers["enabled_providers"]:
                    if name not in KNOWN_PROVIDERS:
                        raise ConfigurationError(
                            f"Unknown provider '{name}', expected one of: {KNOWN_PROVIDERS}"
                        )


@dataclass
class ModifierConfig:
    """Configuration for the access-modifier refactoring."""

    # Class targets rewritten by swapping the single accessibility token in place.
    direct_replacement_targets: List[str] = field(
        default_factory=lambda: ["internal", "private"]
    )


@dataclass
class UsingGroupConfig:
    """Configuration for using-group separation."""

    line_terminator: str = "auto"


@dataclass
class HostConfig:
    """Configuration for the bundled syntax host."""

    max_file_size: int = 1024 * 1024  # 1MB


@dataclass
class ProviderConfig:
    """Which refactoring providers are offered."""

    enabled_providers: List[str] = field(default_factory=lambda: list(KNOWN_PROVIDERS))


@dataclass
class HotRefactorConfig:
    """Main configuration class for HotRefactor."""

    modifier_settings: ModifierConfig = field(default_factory=ModifierConfig)
    using_group_settings: UsingGroupConfig = field(default_factory=UsingGroupConfig)
    host_settings: HostConfig = field(default_factory=HostConfig)
    provider_settings: ProviderConfig = field(default_factory=ProviderConfig)

    @classmethod
    def default(cls) -> "HotRefactorConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        use_env: bool = True,
        validate: bool = True,
    ) -> "HotRefactorConfig":
        """
        Load configuration from multiple sources with precedence:
        1. Default values
        2. Configuration file
        3. Environment variables (if use_env=True)

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            use_env: Whether to load environment variables
            validate: Whether to validate the configuration
        """
        configs_to_merge = []

        file_config = {}
        if config_path:
            file_config = ConfigurationManager.load_config_file(config_path)
        else:
            found_config = ConfigurationManager.find_config_file()
            if found_config:
                file_config = ConfigurationManager.load_config_file(found_config)
                logger.info(f"Loaded configuration from: {found_config}")

        configs_to_merge.append(file_config)

        if use_env:
            configs_to_merge.append(ConfigurationManager.load_env_config())

        merged_config = ConfigurationManager.merge_configs(*configs_to_merge)

        if validate:
            ConfigurationManager.validate_config(merged_config)

        return cls(
            modifier_settings=_apply_section(ModifierConfig(), merged_config.get("modifiers")),
            using_group_settings=_apply_section(
                UsingGroupConfig(), merged_config.get("using_groups")
            ),
            host_settings=_apply_section(HostConfig(), merged_config.get("host")),
            provider_settings=_apply_section(ProviderConfig(), merged_config.get("providers")),
        )

    @classmethod
    def from_file(cls, config_path: str) -> "HotRefactorConfig":
        """Load configuration from a JSON or YAML file."""
        return cls.load(config_path=config_path, use_env=False)

    @classmethod
    def from_env(cls) -> "HotRefactorConfig":
        """Load configuration from environment variables."""
        return cls.load(config_path=None, use_env=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "modifiers": asdict(self.modifier_settings),
            "using_groups": asdict(self.using_group_settings),
            "host": asdict(self.host_settings),
            "providers": asdict(self.provider_settings),
        }

    def to_file(self, config_path: str, format: str = "json") -> None:
        """
        Save configuration to file.

        Args:
            config_path: Path to save configuration
            format: File format ('json' or 'yaml')
        """
        config_data = self.to_dict()

        try:
            with open(config_path, "w", encoding="utf-8") as f:
                if format.lower() in ("yaml", "yml"):
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
                else:
                    json.dump(config_data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration file: {e}")

    def validate(self) -> None:
        """Validate the current configuration."""
        ConfigurationManager.validate_config(self.to_dict())

    def get_config_summary(self) -> str:
        """Get a human-readable summary of the configuration."""
        return f"""HotRefactor Configuration Summary:
Modifiers:
  - Direct replacement targets: {", ".join(self.modifier_settings.direct_replacement_targets) or "none"}

Using groups:
  - Line terminator: {self.using_group_settings.line_terminator}

Host:
  - Max file size: {self.host_settings.max_file_size} bytes

Providers:
  - Enabled: {", ".join(self.provider_settings.enabled_providers) or "none"}
"""


def _apply_section(section: Any, data: Optional[Dict[str, Any]]) -> Any:
    for key, value in (data or {}).items():
        if hasattr(section, key):
            setattr(section, key, value)
        else:
            logger.warning(f"Ignoring unknown configuration key: {key}")
    return section


def load_config(config_path: Optional[str] = None, use_env: bool = True) -> HotRefactorConfig:
    """
    Load configuration from file and/or environment variables.

    Args:
        config_path: Path to configuration file
        use_env: Whether to load environment variables

    Returns:
        HotRefactorConfig: Loaded configuration
    """
    return HotRefactorConfig.load(config_path=config_path, use_env=use_env)
