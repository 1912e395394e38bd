"""
Configuration management for Bing Maps client applications.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

from lib.bing_maps.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

BING_MAPS_SECTION = "bing-maps"
LOGGING_SECTION = "logging"


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholder with actual value.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ``${VAR_NAME}`` placeholders in configuration values.

    Strings, dicts and lists are processed; other values are returned unchanged.
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Loads TOML configuration: a main file plus optional directories of overrides.

    Example config.toml::

        [bing-maps]
        api-key = "${BING_MAPS_KEY}"
        timeout = 10

        [logging]
        level = "INFO"
        console = true
    """

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        """Initialize ConfigManager with config file path and optional config directories.

        Raises:
            ConfigurationError: If no configuration could be loaded or the API key is missing
        """
        self.config_path = configPath
        self.config_dirs = configDirs or []
        self.config = substituteEnvVars(self._loadConfig())

        apiKey = self.getBingMapsConfig().get("api-key")
        if not apiKey:
            raise ConfigurationError(f"{BING_MAPS_SECTION}.api-key not found in configuration", self.config_path)
        if isinstance(apiKey, str) and apiKey.startswith("${"):
            raise ConfigurationError(f"{BING_MAPS_SECTION}.api-key references unset variable {apiKey}", self.config_path)

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, sorted."""
        dirPath = Path(directory)

        if not dirPath.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping")
            return []

        if not dirPath.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping")
            return []

        tomlFiles = [tomlFile for tomlFile in dirPath.rglob("*.toml") if tomlFile.is_file()]
        for tomlFile in tomlFiles:
            logger.debug(f"Found config file: {tomlFile}")

        return sorted(tomlFiles)

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, values of ``newConfig`` win."""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories.

        Broken files inside config directories are logged and skipped, a broken
        main file is an error.
        """
        configFile = Path(self.config_path)
        hasConfigFile = configFile.exists()
        if not hasConfigFile and not self.config_dirs:
            raise ConfigurationError(f"Configuration file {self.config_path} not found", self.config_path)

        config: Dict[str, Any] = {}
        if hasConfigFile:
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
            except (OSError, tomli.TOMLDecodeError) as e:
                raise ConfigurationError(f"Failed to load configuration: {e}", self.config_path) from e
            logger.info(f"Loaded main config from {self.config_path}")

        for configDir in self.config_dirs:
            tomlFiles = self._findTomlFilesRecursive(configDir)
            logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

            for tomlFile in tomlFiles:
                try:
                    with open(tomlFile, "rb") as f:
                        dirConfig = tomli.load(f)
                except (OSError, tomli.TOMLDecodeError) as e:
                    logger.error(f"Failed to load config file {tomlFile}: {e}")
                    continue

                config = self._mergeConfigs(config, dirConfig)
                logger.info(f"Merged config from {tomlFile}")

        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getBingMapsConfig(self) -> Dict[str, Any]:
        """Get Bing Maps client configuration (api-key, base-url, timeout)."""
        return self.get(BING_MAPS_SECTION, {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get(LOGGING_SECTION, {})

    def getApiKey(self) -> str:
        return self.getBingMapsConfig()["api-key"]
