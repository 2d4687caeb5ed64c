"""Whitelist-based column projection for partial-field reads."""

from typing import Iterable, Sequence

from sqlalchemy import Table


def resolve_columns(
    requested: Iterable[str] | None,
    allowed: Sequence[str],
    id_column: str = "id",
) -> list[str]:
    """Translate requested field names into a safe SELECT column list.

    - names outside ``allowed`` are dropped silently
    - duplicates collapse, first occurrence wins the position
    - ``id_column`` is always present and always first
    - nothing valid requested (or nothing at all) -> every allowed column
    """
    allowed_set = frozenset(allowed)
    columns: list[str] = []
    seen: set[str] = set()
    for name in requested or ():
        if name in allowed_set and name not in seen:
            seen.add(name)
            columns.append(name)

    if not columns:
        return list(allowed)

    if id_column in seen:
        columns.remove(id_column)
    return [id_column, *columns]


def check_allow_list(table: Table, allowed: Sequence[str]) -> tuple[str, ...]:
    """Fail at import time if an allow-list names a column the table lacks."""
    unknown = [name for name in allowed if name not in table.c]
    if unknown:
        raise ValueError(f"{table.name}: unknown columns in allow-list {unknown}")
    return tuple(allowed)
