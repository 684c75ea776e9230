"""Main CLI entry point using Typer."""

import logging
from typing import List, Optional

import typer
from botocore.exceptions import NoCredentialsError, ProfileNotFound
from google.auth.exceptions import DefaultCredentialsError
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..adapters.aws import build_registry as build_aws_registry
from ..adapters.aws import get_all_regions
from ..adapters.base import AdapterRegistry
from ..adapters.gcp import GcpContext
from ..adapters.gcp import build_registry as build_gcp_registry
from ..errors import ConfirmationError, DiscoveryError, DurationParseError, InvalidScopeError, NukeFailedError
from ..models.inventory import Inventory
from ..models.outcome import DiscoveryFailure
from ..models.run import RunState
from ..models.scope import UndatedPolicy
from ..nuke.audit import AuditStorage
from ..nuke.confirmation import ConfirmationGate, CountdownConfirmation, PromptConfirmation
from ..nuke.runner import NukeRunner
from ..utils.logging import setup_logging
from .config import Config

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="cloud-nuke",
    help=(
        "A CLI tool to clean up cloud resources (AWS, GCP). "
        "THIS TOOL WILL COMPLETELY REMOVE ALL RESOURCES AND ITS EFFECTS ARE IRREVERSIBLE!!!"
    ),
    add_completion=False,
)

# Create Rich console for output
console = Console()

EXCLUDE_REGION_HELP = "Region to exclude (repeatable)"
OLDER_THAN_HELP = "Only delete resources older than this duration. Any Go-style duration, such as 10m or 8h."
FORCE_HELP = (
    "Skip the confirmation prompt. WARNING: this will automatically delete all resources "
    "after a short countdown, without any confirmation"
)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Config file (default: ~/.cloud-nuke/config.yaml or $CLOUD_NUKE_CONFIG)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """cloud-nuke - delete all resources in an AWS account or GCP project."""
    try:
        config = Config.load(config_path)
    except (ValueError, OSError) as e:
        console.print(f"✗ Invalid configuration: {e}", style="bold red")
        raise typer.Exit(code=1)

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True

    ctx.obj = config


@app.command()
def version():
    """Show version information."""
    console.print(f"cloud-nuke version {__version__}")


def show_inventory(inventory: Inventory, failures: List[DiscoveryFailure]) -> None:
    """Print the resources about to be nuked, grouped by region and kind."""
    if failures:
        console.print(f"\n⚠️  Could not list {len(failures)} (kind, region) unit(s):", style="bold yellow")
        for failure in failures:
            console.print(f"   * {failure.kind} in {failure.region}: {failure.message}", style="yellow")

    table = Table(title=f"Resources to nuke ({inventory.count})", show_lines=False)
    table.add_column("Region", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Identifier")
    table.add_column("Name")
    table.add_column("Zone")
    table.add_column("Created")

    for region, kinds in inventory.by_region().items():
        for kind, resources in kinds.items():
            for resource in resources:
                table.add_row(
                    region,
                    kind,
                    resource.identifier,
                    resource.name or "",
                    resource.zone or "",
                    resource.created_at.strftime("%Y-%m-%d %H:%M:%S UTC") if resource.created_at else "unknown",
                )

    console.print()
    console.print(table)


def _build_gate(config: Config, force: bool) -> ConfirmationGate:
    if force:
        return CountdownConfirmation(delay_seconds=config.force_delay_seconds, console=console)
    return PromptConfirmation(console=console)


def _run_nuke(
    config: Config,
    provider: str,
    registry: AdapterRegistry,
    all_regions: List[str],
    exclude_region: Optional[List[str]],
    older_than: str,
    force: bool,
    exclude_undated: bool,
    max_workers: Optional[int],
    fail_on_discovery_error: bool,
    no_audit: bool,
) -> None:
    """Run the nuke flow and translate its result into an exit code."""
    audit_storage = None
    if config.audit_enabled and not no_audit:
        audit_storage = AuditStorage(config.audit_dir)

    runner = NukeRunner(
        registry=registry,
        gate=_build_gate(config, force),
        presenter=show_inventory,
        audit_storage=audit_storage,
        max_workers=max_workers or config.max_workers,
        fail_on_discovery_error=fail_on_discovery_error or config.fail_on_discovery_error,
    )

    try:
        run = runner.run(
            provider=provider,
            all_regions=all_regions,
            excluded_regions=exclude_region or [],
            older_than=older_than,
            undated_policy=UndatedPolicy.EXCLUDE if exclude_undated else config.undated_policy,
        )
    except (InvalidScopeError, DurationParseError, DiscoveryError, ConfirmationError) as e:
        console.print(f"✗ {e}", style="bold red")
        raise typer.Exit(code=1)
    except NukeFailedError as e:
        outcome = e.outcome
        console.print(
            f"\n✗ {outcome.failed_count} of {outcome.attempted_count} resource(s) failed to nuke:",
            style="bold red",
        )
        for error in e.errors:
            console.print(f"  * {error}", style="red")
        if outcome.succeeded_count:
            console.print(f"✓ {outcome.succeeded_count} resource(s) nuked", style="green")
        raise typer.Exit(code=3)

    if run.state == RunState.ABORTED:
        console.print("Aborted. Nothing was nuked.")
        return

    if run.outcome is None:
        console.print("✓ Nothing to nuke, you're all good!", style="green")
        return

    console.print(f"\n✓ {run.outcome.succeeded_count} resource(s) nuked", style="bold green")


@app.command()
def aws(
    ctx: typer.Context,
    exclude_region: Optional[List[str]] = typer.Option(None, "--exclude-region", help=EXCLUDE_REGION_HELP),
    older_than: str = typer.Option("0s", "--older-than", help=OLDER_THAN_HELP),
    force: bool = typer.Option(False, "--force", help=FORCE_HELP),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile name"),
    exclude_undated: bool = typer.Option(
        False, "--exclude-undated", help="Never nuke resources that report no creation time"
    ),
    max_workers: Optional[int] = typer.Option(None, "--max-workers", min=1, help="Concurrent (kind, region) units"),
    fail_on_discovery_error: bool = typer.Option(
        False, "--fail-on-discovery-error", help="Abort if any region or resource kind cannot be listed"
    ),
    no_audit: bool = typer.Option(False, "--no-audit", help="Do not write an audit log for this run"),
):
    """Clean up AWS resources (ASG, ELB, ELBv2, EC2, EBS, AMI, Snapshots, Elastic IP, S3)."""
    config: Config = ctx.obj
    try:
        aws_profile = profile if profile else config.aws_profile

        all_regions = get_all_regions(aws_profile)
        registry = build_aws_registry(aws_profile)

        _run_nuke(
            config,
            "aws",
            registry,
            all_regions,
            exclude_region,
            older_than,
            force,
            exclude_undated,
            max_workers,
            fail_on_discovery_error,
            no_audit,
        )

    except typer.Exit:
        raise
    except (NoCredentialsError, ProfileNotFound) as e:
        console.print(f"✗ AWS credentials error: {e}", style="bold red")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"✗ Error nuking AWS resources: {e}", style="bold red")
        logger.exception("Error in aws command")
        raise typer.Exit(code=2)


@app.command()
def gcp(
    ctx: typer.Context,
    exclude_region: Optional[List[str]] = typer.Option(None, "--exclude-region", help=EXCLUDE_REGION_HELP),
    older_than: str = typer.Option("0s", "--older-than", help=OLDER_THAN_HELP),
    force: bool = typer.Option(False, "--force", help=FORCE_HELP),
    project: Optional[str] = typer.Option(None, "--project", help="GCP project ID"),
    exclude_undated: bool = typer.Option(
        False, "--exclude-undated", help="Never nuke resources that report no creation time"
    ),
    max_workers: Optional[int] = typer.Option(None, "--max-workers", min=1, help="Concurrent (kind, region) units"),
    fail_on_discovery_error: bool = typer.Option(
        False, "--fail-on-discovery-error", help="Abort if any region or resource kind cannot be listed"
    ),
    no_audit: bool = typer.Option(False, "--no-audit", help="Do not write an audit log for this run"),
):
    """Clean up GCP resources (GCE instances)."""
    config: Config = ctx.obj
    try:
        try:
            context = GcpContext.default(project or config.gcp_project)
        except (DefaultCredentialsError, ValueError) as e:
            console.print(f"✗ GCP credentials error: {e}", style="bold red")
            raise typer.Exit(code=1)
        logger.info(f"Using project: {context.project}")

        all_regions = context.regions()
        registry = build_gcp_registry(context)

        _run_nuke(
            config,
            "gcp",
            registry,
            all_regions,
            exclude_region,
            older_than,
            force,
            exclude_undated,
            max_workers,
            fail_on_discovery_error,
            no_audit,
        )

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"✗ Error nuking GCP resources: {e}", style="bold red")
        logger.exception("Error in gcp command")
        raise typer.Exit(code=2)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
