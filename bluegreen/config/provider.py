"""Configuration provider following Black Box Design principles."""
from dataclasses import dataclass
from typing import Optional, Protocol

from bluegreen.modules.config import ConfigModule, get_config


@dataclass
class ServerConfig:
    """HTTP service configuration."""
    host: str
    port: int
    color: str
    log_level: str
    debug: bool


@dataclass
class ClusterConfig:
    """Cluster CLI configuration."""
    kubectl_bin: str
    namespace: str
    rollout_name: str
    command_timeout: int
    argocd_install_url: str
    rollouts_install_url: str


@dataclass
class GeneratorConfig:
    """Template generator configuration."""
    output_dir: str


@dataclass
class ImageConfig:
    """Container image configuration."""
    docker_bin: str
    registry: Optional[str]
    name: str
    command_timeout: int

    @property
    def repository(self) -> str:
        """Image repository including the registry prefix, if any."""
        if self.registry:
            return f"{self.registry.rstrip('/')}/{self.name}"
        return self.name


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_server_config(self) -> ServerConfig:
        """Get HTTP service configuration."""
        ...

    def get_cluster_config(self) -> ClusterConfig:
        """Get cluster CLI configuration."""
        ...

    def get_image_config(self) -> ImageConfig:
        """Get container image configuration."""
        ...

    def get_generator_config(self) -> GeneratorConfig:
        """Get template generator configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def __init__(self, config: Optional[ConfigModule] = None):
        self._config = config or get_config()

    def get_server_config(self) -> ServerConfig:
        """Get HTTP service configuration from environment variables."""
        return ServerConfig(
            host=self._config.get("host"),
            port=self._config.get("port"),
            color=self._config.get("color"),
            log_level=self._config.get("log_level"),
            debug=self._config.get("debug", False),
        )

    def get_cluster_config(self) -> ClusterConfig:
        """Get cluster CLI configuration from environment variables."""
        return ClusterConfig(
            kubectl_bin=self._config.get("kubectl_bin"),
            namespace=self._config.get("namespace"),
            rollout_name=self._config.get("rollout_name"),
            command_timeout=self._config.get("command_timeout"),
            argocd_install_url=self._config.get("argocd_install_url"),
            rollouts_install_url=self._config.get("rollouts_install_url"),
        )

    def get_image_config(self) -> ImageConfig:
        """Get container image configuration from environment variables."""
        return ImageConfig(
            docker_bin=self._config.get("docker_bin"),
            registry=self._config.get("image_registry"),
            name=self._config.get("image_name"),
            command_timeout=self._config.get("command_timeout"),
        )

    def get_generator_config(self) -> GeneratorConfig:
        """Get template generator configuration from environment variables."""
        return GeneratorConfig(output_dir=self._config.get("output_dir"))
