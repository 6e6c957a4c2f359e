"""Command-line interface for ideadist.

Provides the main entry point and subcommands for materializing an IDE
distribution as a local repository and managing the extraction cache.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ideadist.cache import ArchiveCache
from ideadist.config import DEFAULT_CACHE_DIR, IntelliJSettings, load_settings
from ideadist.errors import IdeaDistError
from ideadist.models import Channel, ResolutionResult
from ideadist.pipeline import IdeaDependencyPipeline
from ideadist.resolvers import DEFAULT_REPOSITORY_URL

app = typer.Typer(
    name="ideadist",
    help="Publish IntelliJ IDEA distributions as a local Ivy repository.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("ideadist")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("ideadist").setLevel(level)


def _build_settings(
    config: Optional[Path],
    version: Optional[str],
    plugins: Optional[list[str]],
    project: Optional[str],
    cache_dir: Optional[Path],
    java_home: Optional[Path],
    no_sources: bool,
    refresh: bool,
) -> IntelliJSettings:
    """Load settings from ``config`` and apply command-line overrides."""
    settings = load_settings(config)
    if version:
        settings.version = version
    if plugins:
        settings.plugins = plugins
    if project:
        settings.project_name = project
    if cache_dir:
        settings.cache_dir = cache_dir
    if java_home:
        settings.java_home = java_home
    if no_sources:
        settings.download_sources = False
    if refresh:
        settings.refresh = True
    return settings


async def _run_resolve(settings: IntelliJSettings) -> Optional[ResolutionResult]:
    """Run the pipeline for ``settings``."""
    pipeline = IdeaDependencyPipeline(settings)
    return await pipeline.resolve()


def _print_result(result: ResolutionResult) -> None:
    module = result.module
    console.print(
        f"Published [bold]{module.coordinates.notation}[/bold] "
        f"({result.distribution.channel.value})"
    )
    console.print(
        f"[green]Descriptor:[/green] {escape(str(result.descriptor_file))}",
        soft_wrap=True,
    )

    table = Table(title="Artifacts")
    table.add_column("Scope")
    table.add_column("Count", justify="right")
    for scope in module.scopes:
        table.add_row(scope.value, str(len(module.artifacts_in(scope))))
    console.print(table)

    if not result.sources.found:
        console.print(f"[yellow]No sources:[/yellow] {escape(result.sources.reason)}")

    console.print("\n[bold]Artifact patterns:[/bold]")
    for pattern in result.patterns:
        console.print(f"  {pattern}", markup=False, highlight=False, soft_wrap=True)

    console.print("\n[bold]Dependencies:[/bold]")
    for dependency in result.dependencies:
        console.print(
            f"  {dependency.configuration}: {dependency.notation}",
            markup=False,
            highlight=False,
        )


@app.command()
def resolve(
    version: Annotated[
        Optional[str],
        typer.Option(
            "--version",
            "-V",
            envvar="IDEADIST_VERSION",
            help="IDE version (e.g. 2023.1 or LATEST-EAP-SNAPSHOT)",
        ),
    ] = None,
    plugin: Annotated[
        Optional[list[str]],
        typer.Option(
            "--plugin",
            "-p",
            help="Bundled plugin id to add at runtime (repeatable)",
        ),
    ] = None,
    project: Annotated[
        Optional[str],
        typer.Option("--project", help="Consuming project name"),
    ] = None,
    cache_dir: Annotated[
        Optional[Path],
        typer.Option("--cache-dir", help="Download and extraction directory"),
    ] = None,
    java_home: Annotated[
        Optional[Path],
        typer.Option(
            "--java-home",
            help="JVM java.home (e.g. <jdk>/jre) whose ../lib holds tools.jar; "
            "defaults to $JAVA_HOME/lib",
        ),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="pyproject.toml with a [tool.ideadist] table",
            exists=True,
            readable=True,
        ),
    ] = None,
    no_sources: Annotated[
        bool,
        typer.Option("--no-sources", help="Skip the sources jar lookup"),
    ] = False,
    refresh: Annotated[
        bool,
        typer.Option("--refresh", help="Download and extract again even if cached"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Materialize an IDE distribution and publish it as an Ivy module.

    Downloads the distribution archive, extracts it into the cache,
    writes the module descriptor and prints the artifact patterns a
    resolver needs to register.
    """
    _setup_logging(verbose)

    try:
        settings = _build_settings(
            config, version, plugin, project, cache_dir, java_home, no_sources, refresh
        )
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Resolving ideaIC {settings.version}...", total=None)
        try:
            result = asyncio.run(_run_resolve(settings))
        except (IdeaDistError, OSError) as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(code=1)
        progress.update(task, completed=True)

    if result is None:
        console.print("[yellow]Nothing to do[/yellow]")
        raise typer.Exit(code=0)

    _print_result(result)


@app.command()
def channel(
    version: Annotated[str, typer.Argument(help="IDE version string")],
    repository_url: Annotated[
        str,
        typer.Option("--repository-url", help="Base URL of the JetBrains index"),
    ] = DEFAULT_REPOSITORY_URL,
) -> None:
    """Show the release channel and index URL for a version."""
    selected = Channel.for_version(version)
    console.print(f"[bold]Channel:[/bold] {selected.value}")
    console.print(f"[bold]Index:[/bold] {repository_url.rstrip('/')}/{selected.value}")


@app.command()
def cache(
    action: Annotated[
        str,
        typer.Argument(help="Cache action: 'show' or 'clear'"),
    ],
    cache_dir: Annotated[
        Path,
        typer.Option("--cache-dir", help="Download and extraction directory"),
    ] = DEFAULT_CACHE_DIR,
) -> None:
    """Manage extracted distributions.

    Actions:
        show  - List extracted distributions, their state and size
        clear - Delete all extracted distributions (archives are kept)
    """
    archive_cache = ArchiveCache()

    if action == "show":
        entries = archive_cache.entries(cache_dir)
        console.print(f"[bold]Cache Location:[/bold] {escape(str(cache_dir))}", soft_wrap=True)
        console.print(f"[bold]Distributions:[/bold] {len(entries)}")
        for entry in entries:
            state = "complete" if entry.complete else "[yellow]incomplete[/yellow]"
            console.print(
                f"  {entry.directory.name}: {state}, {entry.size_bytes / 1024 / 1024:.1f} MB"
            )

    elif action == "clear":
        entries = archive_cache.entries(cache_dir)
        for entry in entries:
            archive_cache.clear(entry.archive_file)
        console.print(f"[green]Cleared {len(entries)} distribution(s)[/green]")

    else:
        err_console.print(f"[red]Unknown action:[/red] {action}")
        err_console.print("Valid actions: show, clear")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
