"""Sort-order validation from the command line."""

from ficarchive.cli.console import get_console
from ficarchive.domain.navigation.sorting import (
    SORTABLE_COLUMNS,
    SortKind,
    set_sort_order,
    valid_sort_column,
)


def sort_order(
    column: str | None = None,
    direction: str | None = None,
    *,
    kind: SortKind = SortKind.PROMPT,
) -> None:
    """Print the ORDER BY clause a listing would use for COLUMN and DIRECTION.

    Args:
        column: Requested sort column.
        direction: Requested direction (asc or desc).
        kind: Listing kind whose whitelist applies.
    """
    console = get_console()
    spec = set_sort_order(column, direction, kind=kind)
    console.print(spec.order)
    if column and not valid_sort_column(column, kind):
        allowed = ", ".join(SORTABLE_COLUMNS[kind])
        console.info(f"'{column}' is not sortable for {kind}; allowed: {allowed}")
