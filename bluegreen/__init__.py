"""
Bluegreen - Argo Rollouts Blue/Green Walkthrough Toolkit

Tooling around a blue/green deployment driven by Argo Rollouts and ArgoCD.

Architecture:
- Each module is self-contained with clear interfaces
- The rollout state machine lives in the Argo Rollouts controller, not here
- Modules only emit files, serve HTTP, or shell out to cluster CLIs

Modules:
- config: Environment-driven configuration
- generator: Walkthrough template files (Dockerfile, apps, manifests, scripts)
- server: The blue and green HTTP services
- cluster: kubectl / kubectl-argo-rollouts wrappers
- pipeline: Container image build and push
"""

__version__ = "1.0.0"
