"""Typer application and CLI entry point for swagup.

This module wires together the top-level Typer application and its two
sub-commands:

* ``convert`` -- load a Swagger 1.x API and print the Swagger 2.0 document.
* ``locate`` -- list the API declaration URLs a resource listing refers to.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app,
mapping :class:`~swagup.exceptions.SwagupError` to its exit code.

See Also:
    :mod:`swagup.config`: Configuration resolution for ``convert``.
    :mod:`swagup.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from swagup import __version__
from swagup.exceptions import InvalidUsageError
from swagup.exit_codes import EXIT_GENERIC_FAILURE
from swagup.models import CollectionFormat

app = typer.Typer(
    name="swagup",
    help="Convert Swagger 1.x API descriptions to Swagger 2.0.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"swagup {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, no_color: bool) -> None:
    """Route ``swagup`` log records to stderr through Rich when verbose."""
    logger = logging.getLogger("swagup")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=False,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Stores the shared flags in the Typer context so that sub-commands can
    build their :class:`~swagup.output.OutputManager`, and enables debug
    logging when ``--verbose`` is given.
    """
    _configure_logging(verbose, no_color)

    ctx.ensure_object(dict)
    ctx.obj["no_color"] = no_color
    ctx.obj["quiet"] = quiet
    ctx.obj["verbose"] = verbose


def _install_output(
    ctx: typer.Context, output_format: str, output_file: Optional[str] = None
) -> None:
    from swagup.output import OutputFormat, OutputManager, set_output

    obj = ctx.obj or {}
    set_output(
        OutputManager(
            format=OutputFormat(output_format),
            no_color=obj.get("no_color", False),
            quiet=obj.get("quiet", False),
            verbose=obj.get("verbose", False),
            output_file=output_file,
        )
    )


def _parse_declarations(values: list[str]) -> Optional[dict[str, str]]:
    """Parse repeated ``PATH=SOURCE`` options into a dict."""
    if not values:
        return None
    declarations: dict[str, str] = {}
    for value in values:
        path, sep, source = value.partition("=")
        if not sep or not path or not source:
            raise InvalidUsageError(
                f"Invalid --declaration '{value}': expected PATH=SOURCE"
            )
        declarations[path] = source
    return declarations


@app.command("convert")
def convert_command(
    ctx: typer.Context,
    source: str = typer.Argument(
        ..., help="Resource listing: URL, file path, or '-' for stdin."
    ),
    declaration: list[str] = typer.Option(
        [],
        "--declaration",
        "-d",
        help="API declaration as PATH=SOURCE (repeatable). Disables discovery.",
    ),
    collection_format: Optional[CollectionFormat] = typer.Option(
        None, "--collection-format", help="collectionFormat for array parameters."
    ),
    tags_from_paths: Optional[bool] = typer.Option(
        None,
        "--tags-from-paths/--tags-from-resource-paths",
        help="Name tags after listing paths instead of resourcePath.",
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to a JSON config file."
    ),
    yaml_output: bool = typer.Option(False, "--yaml", help="Emit YAML."),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the document to a file."
    ),
) -> None:
    """Convert a Swagger 1.x API to a Swagger 2.0 document."""
    from swagup.config import resolve_config
    from swagup.loader import convert_from_source
    from swagup.output import debug, get_output, success

    if yaml_output and json_output:
        raise InvalidUsageError("--yaml and --json are mutually exclusive")

    cli_format: Optional[str] = None
    if yaml_output:
        cli_format = "yaml"
    elif json_output:
        cli_format = "json"

    config = resolve_config(
        config_file=config_file,
        cli_collection_format=collection_format.value if collection_format else None,
        cli_build_tags_from_paths=tags_from_paths,
        cli_output_format=cli_format,
    )
    _install_output(ctx, config.output_format, output_file)

    debug(f"Converting {source}")
    document = convert_from_source(
        source,
        options=config.options,
        declarations=_parse_declarations(declaration),
        timeout=config.timeout,
    )

    get_output().print_document(document)
    if output_file:
        success(f"Wrote {output_file}")


@app.command("locate")
def locate_command(
    ctx: typer.Context,
    source: str = typer.Argument(
        ..., help="Resource listing: URL, file path, or '-' for stdin."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """List the API declaration URLs referenced by a resource listing."""
    from swagup.config import resolve_config
    from swagup.loader import load_document, source_url
    from swagup.locator import list_api_declarations
    from swagup.output import get_output, info

    config = resolve_config()
    _install_output(ctx, "json" if json_output else config.output_format)

    listing = load_document(source, config.timeout)
    locations = list_api_declarations(source_url(source), listing)
    if not locations:
        info("No external API declarations referenced.")
    get_output().print_table(
        ["path", "url"],
        [[path, url] for path, url in locations.items()],
        title="API declarations",
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``swagup`` console script.

    :class:`~swagup.exceptions.SwagupError` instances cause a clean exit
    with the error's ``exit_code``. Any other exception is reported and
    exits with a generic failure; ``--verbose`` adds the traceback.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from swagup.exceptions import SwagupError
        from swagup.output import error

        if isinstance(exc, SwagupError):
            error(str(exc))
            sys.exit(exc.exit_code)
        logging.getLogger(__name__).debug("Unexpected error", exc_info=True)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
