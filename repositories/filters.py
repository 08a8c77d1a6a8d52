"""
repositories/filters.py
-----------------------
Builds the optional WHERE clause shared by the list queries:
a case-insensitive substring search over some text columns and
an inclusive date range over one date column.
"""

from datetime import date
from typing import Optional


def like_pattern(search_key: str) -> str:
    """Wrap a search key in % wildcards, escaping LIKE metacharacters."""
    escaped = (
        search_key.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def build_filters(
    search_key: Optional[str],
    search_columns: list[str],
    date_column: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> tuple[str, list]:
    """
    Build a WHERE clause and its parameters.

    Args:
        search_key: Substring to look for; None or blank disables the search.
        search_columns: SQL expressions compared with LOWER(...) LIKE LOWER(%s).
        date_column: Column the date range applies to.
        start: Inclusive lower bound. The range is used only if `end` is set too.
        end: Inclusive upper bound.

    Returns:
        (" WHERE ...", params) or ("", []) when nothing is filtered.
    """
    clauses: list[str] = []
    params: list = []

    if search_key and search_key.strip():
        pattern = like_pattern(search_key.strip())
        ors = [f"LOWER({col}) LIKE LOWER(%s)" for col in search_columns]
        clauses.append("(" + " OR ".join(ors) + ")")
        params.extend([pattern] * len(search_columns))

    if start is not None and end is not None:
        clauses.append(f"{date_column} BETWEEN %s AND %s")
        params.extend([start, end])

    if not clauses:
        return "", []
    return " WHERE " + " AND ".join(clauses), params
