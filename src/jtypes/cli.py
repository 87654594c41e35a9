"""Generate TypeScript type aliases from JSON files.

Every distinct object shape gets one alias, shared by all the places where it
occurs across the input files.
"""

import importlib.metadata
import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from beartype.door import is_bearable
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from jtypes.cache import TypeCache, create_cache
from jtypes.normalize import is_alias, normalize, origin_label, register, type_alias
from jtypes.render import common_declarations, type_body
from jtypes.report import unknown_array_warning, unresolved_declarations
from jtypes.util import MISSING, get_path, read_json, write_lines

logger = logging.getLogger("jtypes")

app = typer.Typer(
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    no_args_is_help=True,
    help=__doc__,
)

FilesArg = Annotated[
    list[Path],
    typer.Argument(help="Input JSON files. Use '-' for stdin.", allow_dash=True),
]
PathOpt = Annotated[
    str | None,
    typer.Option(
        "--path",
        "-p",
        help="Path to the key in the JSON object. Example: 'data.attributes'."
        " Applied to all files.",
    ),
]


def _load(file: Path, path: str | None) -> Any:
    try:
        data = read_json(file)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        typer.echo(f"{file}: invalid JSON: {e}", err=True)
        raise typer.Exit(1) from e
    except OSError as e:
        typer.echo(f"{file}: cannot read file: {e.strerror or e}", err=True)
        raise typer.Exit(1) from e

    if not path:
        return data

    if not is_bearable(data, dict[str, Any]):
        typer.echo(f"{file}: --path needs a JSON object at the top level.", err=True)
        raise typer.Exit(1)

    value = get_path(data, path)
    if value is MISSING:
        typer.echo(f"{file}: key path {path!r} not found.", err=True)
        typer.echo(f"Found object with keys: {', '.join(map(repr, data))}", err=True)
        raise typer.Exit(1)
    return value


def _infer(files: list[Path], path: str | None) -> tuple[TypeCache, list[str]]:
    """Normalize all `files` on one cache. Returns the cache and the root aliases."""
    cache = create_cache()
    roots: list[str] = []

    for file in tqdm(files, desc="Parsing JSON files", disable=len(files) < 2):
        data = _load(file, path)
        label = origin_label("stdin" if file.name == "-" else str(file))
        alias = normalize(cache, data, label).alias
        if not is_alias(alias):
            # Primitive and array roots have no declaration to export otherwise
            alias = register(cache, alias, label)
        roots.append(alias)
        logger.debug("Finished %s: %s", file, alias)

    logger.info("Found %d types in %d files", len(cache), len(files))
    return cache, roots


@app.command(no_args_is_help=True)
def generate(
    files: FilesArg,
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output declaration file. Use '-' for stdout.",
            allow_dash=True,
        ),
    ] = Path("-"),
    path: PathOpt = None,
    computed: Annotated[
        bool, typer.Option(help="Wrap types in the C<...> expansion helper.")
    ] = True,
    contexts: Annotated[
        bool, typer.Option(help="Add where each type was found as a comment.")
    ] = True,
) -> None:
    """Write the type aliases for all FILES.

    The root type of each file is exported. Roots that are arrays or primitives get
    an alias of their own, e.g. `export type T1 = T0[];`.
    """
    cache, roots = _infer(files, path)
    declarations = cache.declarations()

    write_lines(
        common_declarations(
            declarations,
            set(roots),
            computed=computed,
            include_contexts=contexts,
        ),
        output,
    )

    if unresolved := unresolved_declarations(declarations):
        output_name = "the output" if output.name == "-" else output.name
        logger.warning(unknown_array_warning(unresolved, output_name))


@app.command(no_args_is_help=True)
def shapes(files: FilesArg, path: PathOpt = None) -> None:
    """Show the shapes found in FILES and how often each one occurs."""
    cache, _ = _infer(files, path)

    table = Table("Alias", "Uses", "First context", "Type")
    for declaration in cache.declarations():
        table.add_row(
            type_alias(declaration.id),
            str(len(declaration.contexts)),
            escape(declaration.contexts[0]),
            escape(type_body(declaration)),
        )
    Console().print(table)


def _version_callback(show: bool) -> None:
    if show:
        name = "jtypes"
        version = importlib.metadata.version(name)
        print(f"{name} {version}")
        sys.exit()


@app.callback()
def main(
    _: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug messages.")
    ] = False,
):
    logging.basicConfig(format="%(asctime)s %(message)s")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


if __name__ == "__main__":
    app()
