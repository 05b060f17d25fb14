# ABOUTME: The `opfmeta items` command for viewing the resolved refinement hierarchy.
# ABOUTME: Prints global items with their nested refinements, then refines and links.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from opfmeta.cli.options import load_or_exit, package_argument
from opfmeta.metadata.types import MetadataItem


def _label(item: MetadataItem) -> str:
    label = f"[bold]{escape(item.property)}[/bold] = {escape(item.value)}"
    if item.lang:
        label += f" [dim]({escape(item.lang)})[/dim]"
    if item.id:
        label += f" [dim]#{escape(item.id)}[/dim]"
    return label


def _add_item(tree: Tree, item: MetadataItem) -> None:
    branch = tree.add(_label(item))
    for refined_by in item.children.values():
        for child in refined_by:
            _add_item(branch, child)


@click.command()
@package_argument
def items(path: Path) -> None:
    """Show the resolved metadata items of an EPUB or OPF file."""
    console = Console()
    epub_metadata = load_or_exit(path, console).epub_metadata

    tree = Tree(f"[bold]{escape(path.name)}[/bold]")
    global_branch = tree.add("global")
    for found in epub_metadata.global_items.values():
        for item in found:
            _add_item(global_branch, item)

    if epub_metadata.refine_items:
        refine_branch = tree.add("refines")
        for target, by_property in epub_metadata.refine_items.items():
            target_branch = refine_branch.add(f"#{escape(target)}")
            for found in by_property.values():
                for item in found:
                    _add_item(target_branch, item)

    if epub_metadata.links:
        link_branch = tree.add("links")
        for link in epub_metadata.links:
            rels = " ".join(sorted(link.rels))
            link_branch.add(f"{escape(link.href)} [dim]{escape(rels)}[/dim]")

    console.print(tree)
