"""typenorm CLI — normalize doc-comment type annotations from the shell."""

from __future__ import annotations

import json
import logging

import click
from rich.console import Console
from rich.table import Table

from typenorm import __version__
from typenorm.doctype.parser import DocTypeSyntaxError
from typenorm.models.descriptor import TypeDescriptor

console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = ["table", "json", "yaml"]


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log normalization decisions")
def main(verbose: bool):
    """typenorm — canonical type descriptors from doc-comment annotations.

    Turns annotations such as "int|null", "string[]" or
    "Collection<string, \\App\\User>" into structured type descriptors.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ── Normalize ────────────────────────────────────────────────────────


@main.command()
@click.argument("expression")
@click.option(
    "--format",
    "-f",
    "output_format",
    default="table",
    type=click.Choice(OUTPUT_FORMATS),
    envvar="TYPENORM_FORMAT",
    help="Output format",
)
def normalize(expression: str, output_format: str):
    """Normalize a single type annotation.

    EXPRESSION is the annotation text, e.g. "int[]|null".
    """
    from typenorm.normalizer import normalize_annotation

    try:
        descriptors = normalize_annotation(expression)
    except DocTypeSyntaxError as e:
        console.print(f"[red]Invalid annotation:[/] {e}")
        raise SystemExit(1)

    _print_descriptors(expression, descriptors, output_format)


# ── Batch ────────────────────────────────────────────────────────────


@main.command()
@click.argument("annotations_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "-f",
    "output_format",
    default="table",
    type=click.Choice(OUTPUT_FORMATS),
    envvar="TYPENORM_FORMAT",
    help="Output format",
)
def batch(annotations_file: str, output_format: str):
    """Normalize every annotation listed in a YAML file.

    The file holds either a mapping of name to annotation, or a plain list
    of annotations. Invalid entries are reported and skipped.
    """
    import yaml

    from typenorm.normalizer import normalize_annotation

    try:
        with open(annotations_file) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        console.print(f"[red]Failed to read {annotations_file}:[/] {e}")
        raise SystemExit(1)

    entries = _batch_entries(data)
    if entries is None:
        console.print("[red]Expected a mapping or a list of annotations.[/]")
        raise SystemExit(1)

    # Keep stdout parseable when it carries JSON or YAML
    report = console if output_format == "table" else err_console

    results: dict[str, list[dict]] = {}
    failures = 0
    for name, expression in entries:
        if not isinstance(expression, str):
            report.print(f"  [red]x[/] {name}: expected an annotation string, got {expression!r}")
            failures += 1
            continue
        try:
            descriptors = normalize_annotation(expression)
        except DocTypeSyntaxError as e:
            report.print(f"  [red]x[/] {name}: {e}")
            failures += 1
            continue
        if output_format == "table":
            _print_descriptors(f"{name}: {expression}", descriptors, output_format)
        else:
            results[name] = [d.to_dict() for d in descriptors]

    if output_format != "table":
        _dump(results, output_format)

    if failures:
        raise SystemExit(1)


# ── Kinds ────────────────────────────────────────────────────────────


@main.command()
def kinds():
    """List the builtin kinds and the synonyms folded onto them."""
    from typenorm.models.descriptor import BuiltinKind
    from typenorm.normalizer.tables import SCALAR_SYNONYMS

    aliases: dict[str, list[str]] = {}
    for synonym, canonical in SCALAR_SYNONYMS.items():
        aliases.setdefault(canonical, []).append(synonym)

    table = Table(title="Builtin kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Synonyms")

    for kind in BuiltinKind:
        table.add_row(kind.value, ", ".join(aliases.get(kind.value, [])))

    console.print(table)


# ── Output helpers ───────────────────────────────────────────────────


def _batch_entries(data) -> list[tuple[str, object]] | None:
    if isinstance(data, dict):
        return [(str(name), expr) for name, expr in data.items()]
    if isinstance(data, list):
        # Keyed by position so repeated annotations stay distinct
        return [(str(index), expr) for index, expr in enumerate(data)]
    return None


def _print_descriptors(title: str, descriptors: list[TypeDescriptor], output_format: str):
    if output_format != "table":
        _dump([d.to_dict() for d in descriptors], output_format)
        return

    if not descriptors:
        console.print(f"[yellow]{title}: no type information.[/]")
        return

    table = Table(title=title)
    table.add_column("Type", style="cyan")
    table.add_column("Kind")
    table.add_column("Class")
    table.add_column("Nullable", justify="center")
    table.add_column("Key")
    table.add_column("Value")

    for d in descriptors:
        table.add_row(
            str(d),
            d.kind.value,
            d.class_name or "",
            "[green]Y[/]" if d.nullable else "[dim]N[/]",
            str(d.collection_key_type) if d.collection_key_type else "",
            str(d.collection_value_type) if d.collection_value_type else "",
        )

    console.print(table)


def _dump(data, output_format: str):
    if output_format == "yaml":
        import yaml

        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)
    else:
        click.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    main()
