"""Main CLI interface using Typer."""

import asyncio
from typing import Optional

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ..core import ClusterController, ClusterReporter
from ..exceptions import ClusterNotFoundError, ClusterStateError, GKEManagerError
from ..gke import GKEClient
from ..model.cluster import ClusterStatus
from ..model.config import ClusterConfig
from ..model.report import OutputFormat
from ..operation import DEFAULT_POLL_INTERVAL, OperationWaiter
from ..upgrade import LATEST
from ..utils.logger import get_logger, set_verbosity

# Create CLI app
app = typer.Typer(
    name="gke-manager",
    help="Provides an interface to more easily manage GKE clusters",
    add_completion=True,
)

err_console = Console(stderr=True, soft_wrap=True)
logger = get_logger(__name__)

EXIT_FAILURE = 1
EXIT_CLUSTER_ERROR = 2

ProjectOption = typer.Option(
    "", "--project", envvar="GKE_MANAGER_PROJECT", help="GCP project to run against"
)
LocationOption = typer.Option(
    "", "--location", envvar="GKE_MANAGER_LOCATION", help="Region/zone to use"
)
ClusterNameOption = typer.Option(
    "", "--cluster-name", envvar="GKE_MANAGER_CLUSTER_NAME", help="Name of cluster"
)
PollIntervalOption = typer.Option(
    DEFAULT_POLL_INTERVAL, "--poll-interval", help="Seconds between operation status checks"
)
TimeoutOption = typer.Option(
    None, "--timeout", help="Give up waiting on an operation after this many seconds"
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


def _fail(message: str, code: int = EXIT_FAILURE) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code)


def _parse_bool(value: str) -> bool:
    """Accept true/false style values for options written as --flag=false."""
    try:
        return click.BOOL.convert(value, None, None)
    except click.BadParameter:
        raise typer.BadParameter(f"{value!r} is not a valid boolean")


def _build_config(
    project: str, location: str, cluster_name: str, node_count: int = 0
) -> ClusterConfig:
    """Validate the identity options and freeze them into a config."""
    if not project:
        raise _fail("Must specify a project")
    if not location:
        raise _fail("Must specify a location")
    if not cluster_name:
        raise _fail("Must specify a cluster name")
    try:
        return ClusterConfig(
            project=project, location=location, cluster_name=cluster_name, node_count=node_count
        )
    except ValidationError as e:
        raise _fail(str(e))


def _build_controller(
    config: ClusterConfig, poll_interval: float, timeout: Optional[float]
) -> ClusterController:
    client = GKEClient()
    waiter = OperationWaiter(client, poll_interval=poll_interval, timeout=timeout)
    return ClusterController(client, config, waiter=waiter)


@app.command()
def create(
    project: str = ProjectOption,
    location: str = LocationOption,
    cluster_name: str = ClusterNameOption,
    node_count: int = typer.Option(0, "--node-count", help="Initial number of nodes"),
    poll_interval: float = PollIntervalOption,
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
):
    """Create a cluster, or adopt it if it already exists."""
    set_verbosity(verbose)
    if node_count <= 0:
        raise _fail("Must specify node count greater than 0")
    config = _build_config(project, location, cluster_name, node_count)
    controller = _build_controller(config, poll_interval, timeout)

    try:
        snapshot = asyncio.run(controller.create())
    except ClusterStateError as e:
        logger.error(
            f"Cluster in bad state: project={project} location={location} "
            f"cluster_name={cluster_name} status={e.status} status_message={e.status_message}"
        )
        if e.status == ClusterStatus.ERROR:
            raise _fail("cluster in error state", EXIT_CLUSTER_ERROR)
        raise _fail(f"cluster in bad state: {e.status}")
    except GKEManagerError as e:
        raise _fail(str(e))

    typer.echo(snapshot.current_master_version)


@app.command("upgrade-master")
def upgrade_master(
    project: str = ProjectOption,
    location: str = LocationOption,
    cluster_name: str = ClusterNameOption,
    version: str = typer.Option(LATEST, "--version", help="Release series or 'latest'"),
    poll_interval: float = PollIntervalOption,
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
):
    """Upgrade the control plane to the latest version in a release series."""
    set_verbosity(verbose)
    config = _build_config(project, location, cluster_name)
    controller = _build_controller(config, poll_interval, timeout)

    async def run():
        target = await controller.latest_master_version(version)
        logger.info(f"Resolved master series {version} to {target}")
        return await controller.upgrade_control_plane(target)

    try:
        snapshot = asyncio.run(run())
    except GKEManagerError as e:
        raise _fail(str(e))

    typer.echo(snapshot.current_master_version)


@app.command("upgrade-nodes")
def upgrade_nodes(
    project: str = ProjectOption,
    location: str = LocationOption,
    cluster_name: str = ClusterNameOption,
    version: str = typer.Option(LATEST, "--version", help="Release series or 'latest'"),
    poll_interval: float = PollIntervalOption,
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
):
    """Upgrade the node pools, never past the control plane version."""
    set_verbosity(verbose)
    config = _build_config(project, location, cluster_name)
    controller = _build_controller(config, poll_interval, timeout)

    async def run():
        await controller.refresh()
        target = await controller.latest_node_version(version)
        logger.info(f"Resolved node series {version} to {target}")
        return await controller.upgrade_nodes(target)

    try:
        snapshot = asyncio.run(run())
    except GKEManagerError as e:
        raise _fail(str(e))

    typer.echo(snapshot.current_node_version)


@app.command()
def version(
    project: str = ProjectOption,
    location: str = LocationOption,
    cluster_name: str = ClusterNameOption,
    master: str = typer.Option(
        "true",
        "--master",
        metavar="BOOL",
        callback=_parse_bool,
        help="Query for master version. Queries for node version if false",
    ),
    version: str = typer.Option(LATEST, "--version", help="Release series or 'latest'"),
    verbose: bool = VerboseOption,
):
    """Return the proper master or node version for the given inputs."""
    set_verbosity(verbose)
    config = _build_config(project, location, cluster_name)
    controller = _build_controller(config, DEFAULT_POLL_INTERVAL, None)

    async def run():
        try:
            await controller.refresh()
        except ClusterNotFoundError:
            logger.debug(f"Cluster {cluster_name} not found")

        if master:
            resolved = await controller.latest_master_version(version)
        else:
            resolved = await controller.latest_node_version(version)
        return resolved

    try:
        resolved = asyncio.run(run())
    except ClusterNotFoundError:
        err_console.print("cluster doesn't exist")
        raise _fail("node versions can only be resolved for an existing cluster")
    except GKEManagerError as e:
        raise _fail(f"failed to get latest {'master' if master else 'node'} versions: {e}")

    typer.echo(resolved)

    handle = controller.handle
    if not handle.exists:
        err_console.print("cluster doesn't exist")
    typer.echo(handle.snapshot.current_master_version if handle.exists else "")


app.command("gke-version", help="Alias of 'version'.")(version)


@app.command()
def status(
    project: str = ProjectOption,
    location: str = LocationOption,
    cluster_name: str = ClusterNameOption,
    format: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--format", "-f", help="Output format for the cluster status"
    ),
    verbose: bool = VerboseOption,
):
    """Show the current state of the cluster."""
    set_verbosity(verbose)
    config = _build_config(project, location, cluster_name)
    controller = _build_controller(config, DEFAULT_POLL_INTERVAL, None)

    try:
        asyncio.run(controller.refresh())
    except GKEManagerError as e:
        raise _fail(str(e))

    reporter = ClusterReporter()
    typer.echo(reporter.render(controller.handle, format))


if __name__ == "__main__":
    app()
