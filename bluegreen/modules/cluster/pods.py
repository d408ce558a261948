import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .runner import CommandError, CommandRunner

logger = logging.getLogger("bluegreen.cluster.pods")

POD_TEMPLATE_HASH_LABEL = "rollouts-pod-template-hash"
DEFAULT_SELECTOR = "app=bluegreen-demo"


@dataclass
class PodInfo:
    """The parts of a pod the walkthrough cares about."""

    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    images: List[str] = field(default_factory=list)
    phase: str = "Unknown"

    @property
    def pod_template_hash(self) -> Optional[str]:
        """Replica set hash Argo Rollouts stamps on each pod."""
        return self.labels.get(POD_TEMPLATE_HASH_LABEL)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PodInfo":
        """Create from a pod object as returned by `kubectl get pods -o json`."""
        metadata = data.get("metadata", {})
        spec = data.get("spec", {})
        status = data.get("status", {})
        return cls(
            name=metadata.get("name", ""),
            labels=metadata.get("labels") or {},
            images=[c.get("image", "") for c in spec.get("containers", [])],
            phase=status.get("phase", "Unknown"),
        )


class PodInspector:
    """Query pod labels and images, the Python side of check.sh."""

    def __init__(self, runner: CommandRunner, namespace: str = "default"):
        self.runner = runner
        self.namespace = namespace

    def list_pods(self, selector: str = DEFAULT_SELECTOR) -> List[PodInfo]:
        """
        List pods matching a label selector.

        Raises:
            CommandError: If kubectl fails or returns unparseable output
        """
        result = self.runner.run(
            ["get", "pods", "-n", self.namespace, "-l", selector, "-o", "json"]
        )
        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise CommandError(f"Failed to parse kubectl output: {e}", result) from e

        pods = [PodInfo.from_dict(item) for item in payload.get("items", [])]
        logger.debug(f"Found {len(pods)} pods for selector {selector}")
        return pods

    @staticmethod
    def format_table(pods: List[PodInfo]) -> str:
        """Render pods as a NAME / HASH / IMAGE / PHASE table."""
        rows = [("NAME", "HASH", "IMAGE", "PHASE")]
        for pod in pods:
            rows.append(
                (
                    pod.name,
                    pod.pod_template_hash or "<none>",
                    ",".join(pod.images) or "<none>",
                    pod.phase,
                )
            )

        widths = [max(len(row[i]) for row in rows) for i in range(4)]
        lines = []
        for row in rows:
            lines.append("   ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
        return "\n".join(lines)
