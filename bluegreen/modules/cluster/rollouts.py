"""
Thin pass-through to the `kubectl argo rollouts` plugin.

Promotion and rollback decisions are made by the Argo Rollouts controller;
these calls only ask it to act.
"""

import logging
import subprocess
from typing import List, Optional

from .runner import CommandResult, CommandRunner

logger = logging.getLogger("bluegreen.cluster.rollouts")

DEFAULT_DASHBOARD_PORT = 3100


class RolloutsCLI:
    """Drive a Rollout through the kubectl plugin."""

    def __init__(self, runner: CommandRunner, namespace: str = "default"):
        self.runner = runner
        self.namespace = namespace

    def _args(self, *args: str) -> List[str]:
        return ["argo", "rollouts", *args, "-n", self.namespace]

    def promote(self, name: str, full: bool = False) -> CommandResult:
        """Switch the active service to the preview replica set."""
        args = self._args("promote", name)
        if full:
            args.append("--full")
        logger.info(f"Promoting rollout {name}")
        return self.runner.run(args)

    def undo(self, name: str, to_revision: Optional[int] = None) -> CommandResult:
        """Roll back to the previous (or a given) revision."""
        args = self._args("undo", name)
        if to_revision is not None:
            args.append(f"--to-revision={to_revision}")
        logger.info(f"Rolling back rollout {name}")
        return self.runner.run(args)

    def status(self, name: str, timeout: Optional[int] = None) -> CommandResult:
        """Wait for the rollout to settle and report its status."""
        args = self._args("status", name)
        if timeout is not None:
            args.append(f"--timeout={timeout}s")
        return self.runner.run(
            args, timeout=timeout + 10 if timeout is not None else None
        )

    def get(self, name: str) -> CommandResult:
        """Describe the rollout tree (revisions, replica sets, pods)."""
        return self.runner.run(self._args("get", "rollout", name))

    def dashboard(self, port: int = DEFAULT_DASHBOARD_PORT) -> subprocess.Popen:
        """Start the rollouts dashboard in the background."""
        logger.info(f"Starting rollouts dashboard on port {port}")
        return self.runner.start(
            ["argo", "rollouts", "dashboard", "-n", self.namespace, "--port", str(port)]
        )
