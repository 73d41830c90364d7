from typing import Callable, List

from .models import ErrorRecord, ResultsTable


def render_table(table: ResultsTable) -> str:
    cells = ([table.header] if table.header else []) + table.rows
    width = max((len(cell) for cell in cells), default=0)
    border = "+" + "-" * (width + 2) + "+"
    lines = [border]
    if table.header:
        lines.append(f"| {table.header.center(width)} |")
        lines.append(border)
    for row in table.rows:
        lines.append(f"| {row.ljust(width)} |")
    lines.append(border)
    return "\n".join(lines)


def render_summary(total: int, table: ResultsTable, errors: List[ErrorRecord]) -> str:
    parts = []
    if table.rows:
        parts.append(render_table(table))
    parts.append(f"Generated {len(table.rows)}/{total} articles")
    if errors:
        parts.append(f"{len(errors)} error(s):")
        for record in errors:
            detail = f": {record.message}" if record.message else ""
            parts.append(f"  {record.source}: {record.kind.value}{detail}")
    return "\n".join(parts)


def display_summary(
    total: int,
    table: ResultsTable,
    errors: List[ErrorRecord],
    print_fn: Callable[[str], None] = print,
) -> int:
    """Print the run summary and return the process exit status."""
    print_fn(render_summary(total, table, errors))
    return 1 if errors else 0
