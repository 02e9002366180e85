"""Command line entry point for podson (``kubectl pods-on``)."""

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from podson.constants.defaults import PAGE_SIZE_DEFAULT, WORKERS_DEFAULT
from podson.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from podson.constants.values import APP_NAME, ENV_PREFIX
from podson.controllers.pods.controller import PodsOnController
from podson.controllers.pods.parsers import split_node_args
from podson.errors import PodsOnError
from podson.models.query.result_set import PodResultSet
from podson.models.state.app_settings import QuerySettings
from podson.utils.printer import PodPrinter

logger = logging.getLogger(__name__)

_EPILOG = """Examples:

  kubectl pods-on node1 node2

  kubectl pods-on nodelabel=value

  kubectl pods-on "nodelabel in (value1, value2)"

If this command runs slow on large clusters, tune the --workers and/or
--strategy flags to choose a different query strategy."""

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr; -v enables INFO and -vv DEBUG."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbosity >= 2,
        markup=False,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _env(name: str) -> str:
    return f"{ENV_PREFIX}{name}"


@app.command(name=APP_NAME, epilog=_EPILOG)
def main(
    targets: Annotated[
        list[str],
        typer.Argument(
            metavar="NODE_OR_SELECTOR...",
            help="Node names and/or node label selectors.",
            show_default=False,
        ),
    ],
    workers: Annotated[
        int,
        typer.Option("--workers", envvar=_env("WORKERS"), help="Number of parallel workers to query pods by node."),
    ] = WORKERS_DEFAULT,
    strategy: Annotated[
        str | None,
        typer.Option(
            "--strategy",
            envvar=_env("STRATEGY"),
            help="(dev mode) Choose a strategy to query pods (by-node, all-pods).",
        ),
    ] = None,
    include_daemonsets: Annotated[
        bool,
        typer.Option(
            "--include-daemonsets",
            "-D",
            envvar=_env("INCLUDE_DAEMONSETS"),
            help="Include DaemonSet Pods in the output.",
        ),
    ] = False,
    read_cache_hint: Annotated[
        bool,
        typer.Option(
            "--read-cache-hint",
            envvar=_env("READ_CACHE_HINT"),
            help="Allow the API server to answer from its watch cache (faster, slightly stale).",
        ),
    ] = False,
    page_size: Annotated[
        int,
        typer.Option("--page-size", envvar=_env("PAGE_SIZE"), help="Pods requested per list page."),
    ] = PAGE_SIZE_DEFAULT,
    request_timeout: Annotated[
        str,
        typer.Option(
            "--request-timeout",
            envvar=_env("REQUEST_TIMEOUT"),
            help="Timeout for a single API request (e.g. 30s).",
        ),
    ] = CLUSTER_REQUEST_TIMEOUT,
    context: Annotated[
        str | None,
        typer.Option("--context", envvar=_env("CONTEXT"), help="The kubeconfig context to use."),
    ] = None,
    kubeconfig: Annotated[
        str | None,
        typer.Option("--kubeconfig", envvar=_env("KUBECONFIG"), help="Path to the kubeconfig file."),
    ] = None,
    output: Annotated[
        str,
        typer.Option("--output", "-o", envvar=_env("OUTPUT"), help="Output format: wide, json or yaml."),
    ] = "",
    no_headers: Annotated[
        bool,
        typer.Option("--no-headers", help="Don't print headers in table output."),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv)."),
    ] = 0,
) -> None:
    """List the pods running on the given nodes."""
    configure_logging(verbose)
    logger.debug("positional arguments: %s", targets)
    try:
        node_names, selectors = split_node_args(targets)
        settings = QuerySettings.build(
            workers=workers,
            strategy=strategy,
            include_daemonsets=include_daemonsets,
            read_cache_hint=read_cache_hint,
            page_size=page_size,
            request_timeout=request_timeout,
            context=context,
            kubeconfig=kubeconfig,
            output=output,
            no_headers=no_headers,
        )
        printer = PodPrinter(settings.output, no_headers=settings.no_headers)
        result = run_query(settings, node_names, selectors)
    except PodsOnError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    printer.print(result)


def run_query(settings: QuerySettings, node_names: list, selectors: list) -> PodResultSet:
    """Run one query to completion on a fresh event loop."""

    async def _query() -> PodResultSet:
        controller = PodsOnController(settings)
        return await controller.query(node_names, selectors)

    return asyncio.run(_query())


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
