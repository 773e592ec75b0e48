"""Command-line interface for busgen code generation."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from busgen.generator import parse_file, render_module
from busgen.generator.complexity import COMPLEXITY_THRESHOLD, complexity
from busgen.generator.formatter import RUSTFMT
from busgen.generator.introspect import ValidationError
from busgen.generator.naming import to_snake_case
from busgen.generator.signature import SignatureError
from busgen.generator.types import Interface, is_standard

err_console = Console(stderr=True)


def _load(input_file: str) -> list[Interface]:
    try:
        return parse_file(input_file)
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except OSError as e:
        err_console.print(f"[red]Error:[/red] Could not read {escape(input_file)}: {e.strerror}")
        sys.exit(1)


def _select(interfaces: list[Interface], names: tuple[str, ...], include_all: bool) -> list[Interface]:
    if names:
        known = {i.name: i for i in interfaces}
        missing = [n for n in names if n not in known]
        if missing:
            err_console.print(f"[red]Error:[/red] Unknown interface: {', '.join(missing)}")
            sys.exit(1)
        return [known[n] for n in names]
    return [i for i in interfaces if include_all or not is_standard(i)]


def _targets(interfaces: list[Interface], out_dir: Path) -> dict[Path, Interface]:
    """Assign each interface its output file, refusing to let two share one."""
    targets: dict[Path, Interface] = {}
    for interface in interfaces:
        target = out_dir / f"{to_snake_case(interface.short_name)}.rs"
        if target in targets:
            err_console.print(
                f"[red]Error:[/red] {targets[target].name} and {interface.name} "
                f"would both be written to {escape(str(target))}"
            )
            sys.exit(1)
        targets[target] = interface
    return targets


@click.group()
def cli() -> None:
    """D-Bus proxy code generator for zbus."""


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Introspection XML file")
@click.option(
    "--output",
    "-o",
    "output_path",
    default=".",
    help="Output directory (one file per interface), or - for stdout",
)
@click.option("--service", default=None, help="Default service (bus name) of the proxies")
@click.option("--path", "object_path", default=None, help="Default object path of the proxies")
@click.option(
    "--interface",
    "interface_names",
    multiple=True,
    help="Only generate these interfaces (repeatable)",
)
@click.option(
    "--all",
    "include_all",
    is_flag=True,
    default=False,
    help="Also generate org.freedesktop.DBus.* interfaces zbus already provides",
)
@click.option("--no-format", is_flag=True, default=False, help="Skip rustfmt")
@click.option("--rustfmt", default=RUSTFMT[0], help="rustfmt executable")
def gen(
    input_file: str,
    output_path: str,
    service: str | None,
    object_path: str | None,
    interface_names: tuple[str, ...],
    include_all: bool,
    no_format: bool,
    rustfmt: str,
) -> None:
    """Generate zbus proxy code from introspection data."""
    interfaces = _select(_load(input_file), interface_names, include_all)
    formatter = None if no_format else (rustfmt,)
    source = Path(input_file).name

    try:
        if output_path == "-":
            click.echo(
                render_module(interfaces, source, service, object_path, formatter=formatter),
                nl=False,
            )
            return

        out_dir = Path(output_path)
        targets = _targets(interfaces, out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        for target, interface in targets.items():
            generated_file = render_module(
                [interface], source, service, object_path, formatter=formatter
            )
            target.write_text(generated_file, encoding="utf-8")
            err_console.print(f"Generated {interface.name} in {target}")
    except SignatureError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Introspection XML file")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display interface members and their type complexity."""
    interfaces = _load(input_file)

    if output_json:
        _output_json(interfaces)
    else:
        _output_plain(interfaces)


def _signatures(interface: Interface) -> list[tuple[str, str, str]]:
    """List (kind, member, signature) for every typed position of an interface."""
    rows = []
    for method in interface.methods:
        rows.extend(("method", method.name, arg.type) for arg in method.args)
    for signal in interface.signals:
        rows.extend(("signal", signal.name, arg.type) for arg in signal.args)
    for prop in interface.properties:
        rows.append(("property", prop.name, prop.type))
    return rows


def _output_json(interfaces: list[Interface]) -> None:
    """Output interface info as JSON."""
    data = []
    for interface in interfaces:
        entry = interface.to_dict()
        entry["complexity"] = [
            {"kind": kind, "member": member, "signature": sig, "score": complexity(sig)}
            for kind, member, sig in _signatures(interface)
        ]
        data.append(entry)

    print(json.dumps(data, indent=2))


def _output_plain(interfaces: list[Interface]) -> None:
    """Output interface info using rich text formatting."""
    console = Console()

    for interface in interfaces:
        title = f"[bold cyan]{interface.name}[/bold cyan]"
        if is_standard(interface):
            title += " [dim](standard)[/dim]"
        console.print(title)

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Kind", style="dim")
        table.add_column("Member", style="white")
        table.add_column("Signature", style="yellow")
        table.add_column("Complexity", justify="right")

        for kind, member, sig in _signatures(interface):
            score = complexity(sig)
            style = "red" if score >= COMPLEXITY_THRESHOLD else "green"
            table.add_row(kind, member, sig, f"[{style}]{score}[/{style}]")

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
