# ABOUTME: Shared Click arguments and helpers for opfmeta CLI commands.
# ABOUTME: Provides the package path argument and the common read-or-exit helper.

from pathlib import Path

import click
from rich.console import Console

from opfmeta.formats.epub import EpubReadError, NoMetadataError, read_package_metadata
from opfmeta.formats.package import PackageMetadata

# Exit status when the package document has no <metadata> element.
EXIT_NO_METADATA = 2

package_argument = click.argument("path", type=click.Path(exists=True, path_type=Path))


def load_or_exit(path: Path, console: Console) -> PackageMetadata:
    """Read package metadata, printing an error and exiting on failure."""
    try:
        return read_package_metadata(path)
    except NoMetadataError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(EXIT_NO_METADATA) from exc
    except EpubReadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc
