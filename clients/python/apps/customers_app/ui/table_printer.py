from __future__ import annotations

from typing import Any, Sequence

EMPTY_VALUE = "—"


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        return value.strip() or EMPTY_VALUE
    return str(value)


def format_table(title: str, rows: Sequence[dict[str, Any]], columns: Sequence[tuple[str, str]]) -> list[str]:
    lines = [title]
    if not rows:
        lines.append("(no results)")
        return lines

    widths = []
    for key, header in columns:
        max_cell = max(len(normalize_value(row.get(key))) for row in rows)
        widths.append(max(len(header), max_cell))

    lines.append(" | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(columns)))
    lines.append("-+-".join("-" * width for width in widths))
    for row in rows:
        lines.append(" | ".join(normalize_value(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(columns)))
    return lines


def print_table(title: str, rows: Sequence[dict[str, Any]], columns: Sequence[tuple[str, str]]) -> None:
    print()
    for line in format_table(title, rows, columns):
        print(line)
