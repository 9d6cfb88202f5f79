"""Delimited-text export of ticket rows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def rows_to_csv(rows: Iterable[Sequence[int]]) -> str:
    """Render rows as CSV with a synthetic `Column_1..Column_n` header.

    Width comes from the first row. No rows renders as an empty string.
    """

    materialized = [list(row) for row in rows]
    if not materialized:
        return ""

    header = ",".join(f"Column_{i + 1}" for i in range(len(materialized[0])))
    lines = [header, *(",".join(str(int(n)) for n in row) for row in materialized)]
    return "\n".join(lines)
