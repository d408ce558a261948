"""
Cluster bootstrap: install ArgoCD and Argo Rollouts, then expose them locally.

This replaces install.sh for users who drive the walkthrough from Python.
The controllers themselves are installed from their upstream manifests and
are treated as opaque.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from .runner import CommandError, CommandResult, CommandRunner

logger = logging.getLogger("bluegreen.cluster.bootstrap")

ARGOCD_NAMESPACE = "argocd"
ROLLOUTS_NAMESPACE = "argo-rollouts"


@dataclass(frozen=True)
class PortForward:
    """A local port forwarded to a cluster Service."""

    service: str
    local_port: int
    remote_port: int
    namespace: str

    def args(self) -> List[str]:
        return [
            "port-forward",
            f"svc/{self.service}",
            "-n",
            self.namespace,
            f"{self.local_port}:{self.remote_port}",
        ]


class ClusterBootstrap:
    """Install the external controllers and open the walkthrough port-forwards."""

    def __init__(
        self,
        runner: CommandRunner,
        argocd_install_url: str,
        rollouts_install_url: str,
        app_namespace: str = "default",
    ):
        self.runner = runner
        self.argocd_install_url = argocd_install_url
        self.rollouts_install_url = rollouts_install_url
        self.app_namespace = app_namespace

    @property
    def port_forwards(self) -> List[PortForward]:
        return [
            PortForward("argocd-server", 8080, 443, ARGOCD_NAMESPACE),
            PortForward("bluegreen-active", 8081, 80, self.app_namespace),
        ]

    def create_namespace(self, namespace: str) -> CommandResult:
        """Create a namespace, tolerating one that already exists."""
        result = self.runner.run(["create", "namespace", namespace], check=False)
        if result.success:
            logger.info(f"Created namespace {namespace}")
            return result
        if "AlreadyExists" in result.stderr:
            logger.info(f"Namespace {namespace} already exists")
            return result
        raise CommandError(
            f"Failed to create namespace {namespace}: {result.stderr.strip()}", result
        )

    def install_controllers(self) -> List[CommandResult]:
        """
        Install ArgoCD and then Argo Rollouts.

        Steps run in order and stop at the first failure.

        Returns:
            Results of every step that ran
        """
        results = []

        logger.info("Installing ArgoCD...")
        results.append(self.create_namespace(ARGOCD_NAMESPACE))
        results.append(
            self.runner.run(["apply", "-n", ARGOCD_NAMESPACE, "-f", self.argocd_install_url])
        )

        logger.info("Installing Argo Rollouts...")
        results.append(self.create_namespace(ROLLOUTS_NAMESPACE))
        results.append(
            self.runner.run(
                ["apply", "-n", ROLLOUTS_NAMESPACE, "-f", self.rollouts_install_url]
            )
        )

        logger.info("Controllers installed")
        return results

    def wait_for_controllers(self, timeout: int = 300) -> List[CommandResult]:
        """Block until the ArgoCD server and Argo Rollouts deployments are rolled out."""
        results = []
        for namespace, deployment in (
            (ARGOCD_NAMESPACE, "argocd-server"),
            (ROLLOUTS_NAMESPACE, "argo-rollouts"),
        ):
            logger.info(f"Waiting for deployment/{deployment} in {namespace}")
            results.append(
                self.runner.run(
                    [
                        "rollout",
                        "status",
                        f"deployment/{deployment}",
                        "-n",
                        namespace,
                        f"--timeout={timeout}s",
                    ],
                    timeout=timeout + 10,
                )
            )
        return results

    def apply_manifests(self, paths: Iterable[Union[str, Path]]) -> List[CommandResult]:
        """Apply manifest files into the application namespace."""
        results = []
        for path in paths:
            logger.info(f"Applying {path}")
            results.append(
                self.runner.run(["apply", "-n", self.app_namespace, "-f", str(path)])
            )
        return results

    def port_forward(self) -> List[subprocess.Popen]:
        """
        Start the ArgoCD UI and active-service port-forwards.

        Returns:
            The background processes, in the order of port_forwards
        """
        processes = []
        try:
            for forward in self.port_forwards:
                processes.append(self.runner.start(forward.args()))
                logger.info(
                    f"Forwarding localhost:{forward.local_port} -> "
                    f"svc/{forward.service}:{forward.remote_port}"
                )
        except (CommandError, OSError):
            for process in processes:
                process.terminate()
            for process in processes:
                process.wait()
            raise
        return processes
