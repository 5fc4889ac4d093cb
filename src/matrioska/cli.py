"""CLI tool for compiling and serving matrioska documents."""

import json
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from matrioska.app import build_factory, create_ui
from matrioska.factory.json_factory import MissingKeyError
from matrioska.observability.logging import setup_logging
from matrioska.reader import DocumentReadError, read_document
from matrioska.utils import describe_component

app = typer.Typer(help="Matrioska document CLI")

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

RuleOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--rule",
        "-r",
        help="Rule predicate as name=true|false. Can be repeated.",
    ),
]


def parse_rule_flags(flags: Optional[list[str]]) -> dict[str, bool]:
    """Parses repeated `name=value` rule flags.

    Raises:
        typer.BadParameter: If a flag is malformed.
    """
    rules: dict[str, bool] = {}
    for flag in flags or []:
        name, sep, raw = flag.partition("=")
        value = raw.strip().lower()
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected name=value, got '{flag}'")
        if value in TRUE_VALUES:
            rules[name.strip()] = True
        elif value in FALSE_VALUES:
            rules[name.strip()] = False
        else:
            raise typer.BadParameter(f"Invalid boolean '{raw}' for rule '{name}'")
    return rules


def _compile(path: Path, rule_flags: Optional[list[str]]):
    try:
        document = read_document(path)
    except DocumentReadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    factory = build_factory(parse_rule_flags(rule_flags))
    try:
        return factory.make_component(document)
    except MissingKeyError as e:
        typer.echo(f"Error: missing mandatory key '{e.key}'", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    log_level: Annotated[
        Optional[str],
        typer.Option(help="Log level, defaults to LOG_LEVEL or INFO"),
    ] = None,
):
    setup_logging(log_level)


@app.command("inspect")
def inspect_document(
    path: Annotated[Path, typer.Argument(help="Path to a JSON or YAML document")],
    rule: RuleOption = None,
):
    """Prints the compiled component tree as JSON."""
    component = _compile(path, rule)
    if component is None:
        typer.echo("null")
        return
    typer.echo(json.dumps(describe_component(component), indent=2, default=str))


@app.command("validate")
def validate_document(
    path: Annotated[Path, typer.Argument(help="Path to a JSON or YAML document")],
):
    """Checks that a document compiles with the standard layouts."""
    component = _compile(path, None)
    if component is None:
        typer.echo(f"{path} is valid but its root type is not registered")
    else:
        typer.echo(f"{path} is valid")


@app.command("serve")
def serve(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON or YAML document",
            envvar="MATRIOSKA_DOCUMENT",
        ),
    ],
    rule: RuleOption = None,
    title: Annotated[str, typer.Option(help="Page title")] = "Matrioska",
    port: Annotated[
        Optional[int], typer.Option(help="Server port", envvar="MATRIOSKA_PORT")
    ] = None,
):
    """Builds the UI for a document and launches it."""
    component = _compile(path, rule)
    demo = create_ui(component, title=title)
    demo.launch(server_port=port)


if __name__ == "__main__":
    app()
