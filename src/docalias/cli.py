"""CLI for replaying a doclet dump through the alias resolver."""

import json
import logging
import sys
from pathlib import Path
from typing import List

import click
from rich.console import Console
from rich.table import Table

from docalias.config import load_config
from docalias.errors import DocAliasError
from docalias.exporters import JSONExporter
from docalias.models import Doclet, ParseEvent
from docalias.plugin import ImportAliasPlugin
from docalias.resolution import SlotState

console = Console()


def load_doclets(doclets_path: Path) -> List[Doclet]:
    """Load doclets from a ``jsdoc -X`` style JSON dump."""
    with open(doclets_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("doclets", [])

    return [Doclet.from_dict(item) for item in data]


def source_files(doclets: List[Doclet]) -> List[str]:
    """Distinct source files named by the doclets, in first-seen order."""
    seen = {}
    for doclet in doclets:
        if doclet.source_file:
            seen.setdefault(doclet.source_file, None)
    return list(seen)


@click.command()
@click.option("--doclets", "doclets_path", required=True, help="Path to doclet JSON dump")
@click.option("--config", default=None, help="Path to configuration file")
@click.option("--out", default="output/doclets.json", help="Output JSON file")
@click.option("--verbose", is_flag=True, help="Log resolution details")
def main(doclets_path: str, config: str, out: str, verbose: bool) -> None:
    """Import Alias Resolver.

    Rewrites local import aliases in doclet types to canonical longnames.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    console.print("[bold blue]Import Alias Resolver[/bold blue]")
    console.print()

    try:
        cfg = load_config(config)
        plugin = ImportAliasPlugin(cfg)

        doclets = load_doclets(Path(doclets_path))
        console.print(f"✓ Loaded {len(doclets)} doclets")

        # Step 1: scan sources for aliases
        files = source_files(doclets)
        for filename in files:
            try:
                source = Path(filename).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                console.print(f"[yellow]Warning: Could not read {filename}: {e}[/yellow]")
                continue
            plugin.before_parse(ParseEvent(filename=filename, source=source))

        # Step 2: index declarations
        for doclet in doclets:
            plugin.new_doclet(doclet)

        # Step 3: resolve and rewrite
        stats = plugin.processing_complete(doclets)
        console.print(
            f"✓ Resolved {stats.resolved} aliases ({stats.failed} failed), "
            f"rewrote {stats.doclets_rewritten} doclets"
        )

        output_path = Path(out)
        JSONExporter().export(doclets, plugin.registry, output_path, stats.to_dict())

    except (DocAliasError, OSError, ValueError) as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        sys.exit(1)

    table = Table(title="Import Aliases")
    table.add_column("File", style="cyan")
    table.add_column("Aliases", justify="right")
    table.add_column("Resolved", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Exports", justify="right")

    for info in plugin.registry:
        slots = info.local_aliases.values()
        if not slots and not info.export_table:
            continue
        table.add_row(
            Path(info.filename).name,
            str(len(slots)),
            str(len([s for s in slots if s.state == SlotState.RESOLVED])),
            str(len([s for s in slots if s.state == SlotState.FAILED])),
            str(len(info.export_table))
        )

    console.print()
    console.print(table)
    console.print(f"[dim]Results saved to: {output_path.absolute()}[/dim]")


if __name__ == "__main__":
    main()
