"""
Cluster Module - Black Box Interface

Purpose: Talk to the cluster through kubectl and the argo rollouts plugin
Interface: ClusterBootstrap, PodInspector, RolloutsCLI, CommandRunner
Hidden: Argument construction, subprocess handling, output parsing

Everything here is pass-through; manifests, flags and controller behavior
belong to Kubernetes, ArgoCD and Argo Rollouts.
"""

from .bootstrap import ARGOCD_NAMESPACE, ROLLOUTS_NAMESPACE, ClusterBootstrap, PortForward
from .pods import DEFAULT_SELECTOR, POD_TEMPLATE_HASH_LABEL, PodInfo, PodInspector
from .rollouts import DEFAULT_DASHBOARD_PORT, RolloutsCLI
from .runner import CommandError, CommandResult, CommandRunner

__all__ = [
    "ARGOCD_NAMESPACE",
    "ROLLOUTS_NAMESPACE",
    "ClusterBootstrap",
    "PortForward",
    "DEFAULT_SELECTOR",
    "POD_TEMPLATE_HASH_LABEL",
    "PodInfo",
    "PodInspector",
    "DEFAULT_DASHBOARD_PORT",
    "RolloutsCLI",
    "CommandError",
    "CommandResult",
    "CommandRunner",
]
