"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: get_config(), reset_config(), ConfigModule
Hidden: Config sources, validation logic, environment parsing

Values come from the process environment; a local .env file is read first
so the walkthrough can be driven without exporting variables by hand.
"""

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

DEFAULT_ARGOCD_INSTALL_URL = (
    "https://raw.githubusercontent.com/argoproj/argo-cd/stable/manifests/install.yaml"
)
DEFAULT_ROLLOUTS_INSTALL_URL = (
    "https://github.com/argoproj/argo-rollouts/releases/latest/download/install.yaml"
)


# Configuration Contract: Required and Optional Keys

REQUIRED_CONFIG_KEYS = {
    "host": "HTTP service bind address",
    "port": "HTTP service port",
    "color": "Which service to run (blue or green)",
    "log_level": "Logging level (DEBUG, INFO, WARNING, ERROR)",
    "output_dir": "Directory the generator writes template files into",
    "namespace": "Namespace the demo Rollout and Services live in",
    "rollout_name": "Name of the demo Rollout resource",
    "kubectl_bin": "kubectl executable",
    "docker_bin": "docker executable",
    "command_timeout": "External command timeout in seconds",
    "image_name": "Container image repository name",
    "argocd_install_url": "ArgoCD install manifest URL",
    "rollouts_install_url": "Argo Rollouts install manifest URL",
}

OPTIONAL_CONFIG_KEYS = {
    "debug": {
        "description": "Enable debug mode (uvicorn reload)",
        "default": False,
    },
    "image_registry": {
        "description": "Registry prefix for the container image (e.g. ghcr.io/acme)",
        "default": None,
    },
}


def _get_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class ConfigModule:
    """Configuration management module."""

    def __init__(self, dotenv_path: Optional[str] = None):
        """Initialize with environment variables."""
        self._config = self._load_from_env(dotenv_path)
        self._validate_required_keys()

    def _validate_required_keys(self) -> None:
        """
        Validate that all required configuration keys are present.

        Raises:
            ValueError: If required keys are missing
        """
        missing_keys = []
        for key in REQUIRED_CONFIG_KEYS:
            if key not in self._config or self._config[key] in (None, ""):
                missing_keys.append(key)

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}. "
                f"Check environment variables and the local .env file."
            )

    def _load_from_env(self, dotenv_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from environment."""
        load_dotenv(dotenv_path)

        return {
            # HTTP service settings
            "host": os.getenv("BLUEGREEN_HOST", "0.0.0.0"),
            "port": _get_int("BLUEGREEN_PORT", "8080"),
            "color": os.getenv("BLUEGREEN_COLOR", "blue").lower(),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            # Generator settings
            "output_dir": os.getenv("BLUEGREEN_OUTPUT_DIR", "bluegreen-demo"),
            # Cluster settings
            "namespace": os.getenv("BLUEGREEN_NAMESPACE", "default"),
            "rollout_name": os.getenv("BLUEGREEN_ROLLOUT", "bluegreen-demo"),
            "kubectl_bin": os.getenv("KUBECTL_BIN", "kubectl"),
            "command_timeout": _get_int("COMMAND_TIMEOUT", "120"),
            "argocd_install_url": os.getenv("ARGOCD_INSTALL_URL", DEFAULT_ARGOCD_INSTALL_URL),
            "rollouts_install_url": os.getenv(
                "ROLLOUTS_INSTALL_URL", DEFAULT_ROLLOUTS_INSTALL_URL
            ),
            # Image settings
            "docker_bin": os.getenv("DOCKER_BIN", "docker"),
            "image_registry": os.getenv("IMAGE_REGISTRY") or None,
            "image_name": os.getenv("IMAGE_NAME", "bluegreen-demo"),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self._config[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """
        Get the configuration schema (contract) for this module.

        Returns:
            Dictionary with 'required' and 'optional' key specifications

        Example:
            >>> schema = ConfigModule.get_config_schema()
            >>> print(schema['required']['port'])
            'HTTP service port'
        """
        return {
            "required": REQUIRED_CONFIG_KEYS.copy(),
            "optional": OPTIONAL_CONFIG_KEYS.copy(),
        }


# Singleton instance
_instance = None


def get_config() -> ConfigModule:
    """Get the configuration module singleton."""
    global _instance
    if _instance is None:
        _instance = ConfigModule()
    return _instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _instance
    _instance = None


__all__ = ["get_config", "reset_config", "ConfigModule"]
