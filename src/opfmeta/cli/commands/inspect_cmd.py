# ABOUTME: The `opfmeta inspect` command for viewing adapted publication metadata.
# ABOUTME: Shows titles, contributors, collections, subjects and presentation for one file.

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from opfmeta.cli.options import load_or_exit, package_argument
from opfmeta.metadata.types import Collection, Contributor, LocalizedString

_ROLE_LABELS = (
    ("Authors", "authors"),
    ("Translators", "translators"),
    ("Editors", "editors"),
    ("Publishers", "publishers"),
    ("Artists", "artists"),
    ("Illustrators", "illustrators"),
    ("Colorists", "colorists"),
    ("Narrators", "narrators"),
    ("Contributors", "contributors"),
)


def _localized(value: LocalizedString) -> str:
    if len(value.translations) == 1:
        return escape(value.string)
    return "; ".join(
        escape(f"{text} [{lang or 'und'}]") for lang, text in value.translations.items()
    )


def _people(people: list[Contributor]) -> str:
    return ", ".join(escape(person.name) for person in people)


def _collections(collections: list[Collection]) -> str:
    parts = []
    for collection in collections:
        if collection.position is not None:
            parts.append(escape(f"{collection.name} #{collection.position:g}"))
        else:
            parts.append(escape(collection.name))
    return ", ".join(parts)


@click.command()
@package_argument
@click.option("--json", "as_json", is_flag=True, help="Print the metadata as JSON.")
def inspect(path: Path, as_json: bool) -> None:
    """Show metadata adapted from an EPUB or OPF file."""
    console = Console()
    meta = load_or_exit(path, console).metadata

    if as_json:
        click.echo(json.dumps(meta.to_dict(), indent=2, ensure_ascii=False))
        return

    table = Table(title=str(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", _localized(meta.localized_title))
    if meta.localized_subtitle is not None:
        table.add_row("Subtitle", _localized(meta.localized_subtitle))
    if meta.localized_sort_as is not None:
        table.add_row("Sort As", _localized(meta.localized_sort_as))
    table.add_row("Identifier", escape(meta.identifier) if meta.identifier else "[dim]none[/dim]")
    table.add_row("Languages", escape(", ".join(meta.languages)) or "[dim]unknown[/dim]")
    if meta.published is not None:
        table.add_row("Published", meta.published.isoformat())
    if meta.modified is not None:
        table.add_row("Modified", meta.modified.isoformat())

    for label, attr in _ROLE_LABELS:
        people = getattr(meta, attr)
        if people:
            table.add_row(label, _people(people))

    if meta.belongs_to_series:
        table.add_row("Series", _collections(meta.belongs_to_series))
    if meta.belongs_to_collections:
        table.add_row("Collections", _collections(meta.belongs_to_collections))
    if meta.subjects:
        table.add_row("Subjects", ", ".join(escape(subject.name) for subject in meta.subjects))
    if meta.duration is not None:
        table.add_row("Duration", f"{meta.duration:g}s")
    table.add_row("Reading Progression", meta.reading_progression.value)

    presentation = meta.presentation
    table.add_row(
        "Presentation",
        f"{presentation.layout.value}, overflow={presentation.overflow.value}"
        f"{' (continuous)' if presentation.continuous else ''}, "
        f"orientation={presentation.orientation.value}, spread={presentation.spread.value}",
    )
    for prop, value in meta.other_metadata.items():
        if prop == "presentation":
            continue
        if not isinstance(value, str):
            value = json.dumps(value, ensure_ascii=False)
        table.add_row(escape(prop), escape(value))

    console.print(table)
