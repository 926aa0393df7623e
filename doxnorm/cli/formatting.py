"""
Output formatting helpers for the doxnorm CLI.

Entries are serialized with ``to_dict()`` so every output format carries the
same field names.
"""

import json
from typing import Any

import yaml  # type: ignore[import-untyped]
from rich.markup import escape
from rich.table import Table

from doxnorm.normalizer import ClassEntry, DocumentationEntry, entries_to_dicts


def serialize_results(
    results: dict[str, list[DocumentationEntry]], by_path: bool = False
) -> Any:
    """Serialize per-file results.

    Results are keyed by path when ``by_path`` is set; otherwise a single
    file is unwrapped to its list of entries.
    """
    if not by_path and len(results) == 1:
        return entries_to_dicts(next(iter(results.values())))
    return {path: entries_to_dicts(entries) for path, entries in results.items()}


def format_json(
    results: dict[str, list[DocumentationEntry]], by_path: bool = False
) -> str:
    return json.dumps(serialize_results(results, by_path), indent=2, ensure_ascii=False)


def format_yaml(
    results: dict[str, list[DocumentationEntry]], by_path: bool = False
) -> str:
    return yaml.safe_dump(
        serialize_results(results, by_path), sort_keys=False, allow_unicode=True
    )


def build_table(results: dict[str, list[DocumentationEntry]], title: str) -> Table:
    """Build a summary table with one row per entry."""
    table = Table(title=title)

    # Add file column if showing multiple files
    show_file = len(results) > 1
    if show_file:
        table.add_column("File", style="dim")

    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Signature", style="green")
    table.add_column("UID", style="blue")
    table.add_column("Description", style="white", max_width=40)

    for path, entries in results.items():
        for entry in entries:
            if isinstance(entry, ClassEntry):
                signature = escape(entry.display or entry.name)
            else:
                signature = escape(f"{entry.name}({entry.params})")
                if entry.is_private:
                    signature = f"[dim]{signature} (private)[/dim]"

            summary = entry.description.split("\n")[0].strip()
            if len(summary) > 37:
                summary = summary[:37] + "..."

            row = [path] if show_file else []
            row.extend(
                [escape(entry.name), entry.type, signature, entry.uid, escape(summary)]
            )
            table.add_row(*row)

    return table
