#!/usr/bin/env python3
"""
Bluegreen - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Dispatches the walkthrough commands

All logic is in the modules, following black box principles.
"""

import functools
import logging
import subprocess
from typing import List, Optional, Tuple

import click

from bluegreen import __version__
from bluegreen.config.provider import ConfigProvider, EnvConfigProvider
from bluegreen.logging_config import setup_logging
from bluegreen.modules.cluster import (
    DEFAULT_DASHBOARD_PORT,
    DEFAULT_SELECTOR,
    ClusterBootstrap,
    CommandError,
    CommandRunner,
    PodInspector,
    RolloutsCLI,
)
from bluegreen.modules.config import get_config
from bluegreen.modules.generator import write_templates
from bluegreen.modules.pipeline import ImageBuilder
from bluegreen.modules.server import serve as serve_app

logger = logging.getLogger("bluegreen.main")

MANIFESTS = ("service.yaml", "rollout.yaml")


def handle_errors(func):
    """Turn module errors into a clean CLI failure."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (CommandError, OSError, ValueError) as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def kubectl_runner(provider: ConfigProvider) -> CommandRunner:
    cluster = provider.get_cluster_config()
    return CommandRunner(binary=cluster.kubectl_bin, timeout=cluster.command_timeout)


def wait_for(processes: List[subprocess.Popen]) -> None:
    """Block on background processes until they exit or the user interrupts."""
    try:
        for process in processes:
            process.wait()
    except KeyboardInterrupt:
        logger.info("Stopping background processes...")
        for process in processes:
            process.terminate()
        for process in processes:
            process.wait()


@click.group()
@click.version_option(__version__, prog_name="bluegreen")
@click.pass_context
def cli(ctx: click.Context):
    """Blue/green walkthrough with Argo Rollouts."""
    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(config.get("log_level"))
    ctx.obj = EnvConfigProvider(config)


@cli.command()
@click.argument("output_dir", required=False, type=click.Path(file_okay=False))
@click.pass_obj
@handle_errors
def generate(provider: EnvConfigProvider, output_dir: Optional[str]):
    """Write the walkthrough files into OUTPUT_DIR."""
    target = output_dir or provider.get_generator_config().output_dir
    for path in write_templates(target):
        click.echo(str(path))


@cli.command()
@click.option("--color", type=click.Choice(["blue", "green"], case_sensitive=False), default=None)
@click.option("--host", default=None)
@click.option("--port", type=int, default=None)
@click.pass_obj
@handle_errors
def serve(provider: EnvConfigProvider, color: Optional[str], host: Optional[str], port: Optional[int]):
    """Run the blue or green HTTP service."""
    server = provider.get_server_config()
    serve_app(
        color or server.color,
        host=host or server.host,
        port=port or server.port,
        log_level=server.log_level,
        reload=server.debug,
    )


@cli.command()
@click.option("--wait/--no-wait", default=False, help="Wait for the controllers to roll out.")
@click.option("--timeout", type=int, default=300, show_default=True)
@click.pass_obj
@handle_errors
def install(provider: EnvConfigProvider, wait: bool, timeout: int):
    """Install ArgoCD and Argo Rollouts into the current cluster."""
    cluster = provider.get_cluster_config()
    bootstrap = ClusterBootstrap(
        kubectl_runner(provider),
        argocd_install_url=cluster.argocd_install_url,
        rollouts_install_url=cluster.rollouts_install_url,
        app_namespace=cluster.namespace,
    )
    bootstrap.install_controllers()
    if wait:
        bootstrap.wait_for_controllers(timeout=timeout)
    click.echo("ArgoCD and Argo Rollouts installed")


@cli.command("port-forward")
@click.pass_obj
@handle_errors
def port_forward(provider: EnvConfigProvider):
    """Forward the ArgoCD UI and the active service to localhost."""
    cluster = provider.get_cluster_config()
    bootstrap = ClusterBootstrap(
        kubectl_runner(provider),
        argocd_install_url=cluster.argocd_install_url,
        rollouts_install_url=cluster.rollouts_install_url,
        app_namespace=cluster.namespace,
    )
    processes = bootstrap.port_forward()
    for forward in bootstrap.port_forwards:
        click.echo(f"localhost:{forward.local_port} -> svc/{forward.service}:{forward.remote_port}")
    wait_for(processes)


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
@handle_errors
def apply(provider: EnvConfigProvider, files: Tuple[str, ...]):
    """Apply FILES (default: the generated service.yaml and rollout.yaml)."""
    cluster = provider.get_cluster_config()
    if not files:
        output_dir = provider.get_generator_config().output_dir
        files = tuple(f"{output_dir}/{name}" for name in MANIFESTS)

    bootstrap = ClusterBootstrap(
        kubectl_runner(provider),
        argocd_install_url=cluster.argocd_install_url,
        rollouts_install_url=cluster.rollouts_install_url,
        app_namespace=cluster.namespace,
    )
    for result in bootstrap.apply_manifests(files):
        click.echo(result.stdout.rstrip())


@cli.command()
@click.option("--selector", "-l", default=DEFAULT_SELECTOR, show_default=True)
@click.pass_obj
@handle_errors
def check(provider: EnvConfigProvider, selector: str):
    """Show pods with their rollout hash label and image."""
    cluster = provider.get_cluster_config()
    inspector = PodInspector(kubectl_runner(provider), namespace=cluster.namespace)
    click.echo(inspector.format_table(inspector.list_pods(selector)))


@cli.command()
@click.option("--full", is_flag=True, help="Skip remaining pauses and analysis.")
@click.option("--name", default=None, help="Rollout name.")
@click.pass_obj
@handle_errors
def promote(provider: EnvConfigProvider, full: bool, name: Optional[str]):
    """Promote the preview replica set to active."""
    cluster = provider.get_cluster_config()
    rollouts = RolloutsCLI(kubectl_runner(provider), namespace=cluster.namespace)
    click.echo(rollouts.promote(name or cluster.rollout_name, full=full).stdout.rstrip())


@cli.command()
@click.option("--to-revision", type=int, default=None)
@click.option("--name", default=None, help="Rollout name.")
@click.pass_obj
@handle_errors
def undo(provider: EnvConfigProvider, to_revision: Optional[int], name: Optional[str]):
    """Roll back the rollout."""
    cluster = provider.get_cluster_config()
    rollouts = RolloutsCLI(kubectl_runner(provider), namespace=cluster.namespace)
    click.echo(
        rollouts.undo(name or cluster.rollout_name, to_revision=to_revision).stdout.rstrip()
    )


@cli.command()
@click.option("--timeout", type=int, default=None)
@click.option("--name", default=None, help="Rollout name.")
@click.pass_obj
@handle_errors
def status(provider: EnvConfigProvider, timeout: Optional[int], name: Optional[str]):
    """Show rollout status."""
    cluster = provider.get_cluster_config()
    rollouts = RolloutsCLI(kubectl_runner(provider), namespace=cluster.namespace)
    click.echo(rollouts.status(name or cluster.rollout_name, timeout=timeout).stdout.rstrip())


@cli.command()
@click.option("--port", type=int, default=DEFAULT_DASHBOARD_PORT, show_default=True)
@click.pass_obj
@handle_errors
def dashboard(provider: EnvConfigProvider, port: int):
    """Run the Argo Rollouts dashboard."""
    cluster = provider.get_cluster_config()
    rollouts = RolloutsCLI(kubectl_runner(provider), namespace=cluster.namespace)
    process = rollouts.dashboard(port)
    click.echo(f"Dashboard at http://localhost:{port}")
    wait_for([process])


@cli.command()
@click.option("--push/--no-push", default=False, show_default=True)
@click.option("--context", default=None, help="Build context (default: the output directory).")
@click.option("--tag", "tags", multiple=True, type=click.Choice(["blue", "green"]))
@click.pass_obj
@handle_errors
def build(provider: EnvConfigProvider, push: bool, context: Optional[str], tags: Tuple[str, ...]):
    """Build (and optionally push) the blue and green images."""
    image = provider.get_image_config()
    runner = CommandRunner(binary=image.docker_bin, timeout=image.command_timeout)
    builder = ImageBuilder(
        runner, image.repository, context=context or provider.get_generator_config().output_dir
    )
    builder.build_and_push(push=push, tags=list(tags) or None)
    for tag in tags or ("blue", "green"):
        click.echo(builder.image_ref(tag))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
