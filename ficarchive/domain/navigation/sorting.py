"""Sort-order whitelisting for listing pages.

Only whitelisted columns ever reach an ORDER BY; anything else falls back to
``id DESC``.
"""

from dataclasses import dataclass
from enum import StrEnum


class SortKind(StrEnum):
    WORK = "work"
    TAG = "tag"
    COLLECTION = "collection"
    PROMPT = "prompt"
    CLAIM = "claim"


SORTABLE_COLUMNS: dict[SortKind, tuple[str, ...]] = {
    SortKind.WORK: ("author", "title", "date", "created_at", "word_count", "hit_count"),
    SortKind.TAG: ("name", "created_at", "taggings_count_cache", "uses"),
    SortKind.COLLECTION: ("collections.title", "collections.created_at"),
    SortKind.PROMPT: ("fandom", "created_at", "prompter"),
    SortKind.CLAIM: ("created_at", "claimer"),
}

SORT_DIRECTIONS = ("asc", "desc")

DEFAULT_SORT_COLUMN = "id"
DEFAULT_SORT_DIRECTION = "DESC"


def _allowed_columns(kind: SortKind | str) -> tuple[str, ...]:
    try:
        return SORTABLE_COLUMNS[SortKind(str(kind).lower())]
    except ValueError:
        return ()


def valid_sort_column(value: str | None, kind: SortKind | str = SortKind.WORK) -> bool:
    """Case-insensitive membership in the kind's whitelist. Unknown kinds allow nothing."""
    if not value or not value.strip():
        return False
    return value.lower() in _allowed_columns(kind)


def valid_sort_direction(value: str | None) -> bool:
    if not value or not value.strip():
        return False
    return value.lower() in SORT_DIRECTIONS


@dataclass(frozen=True)
class SortSpec:
    """A validated (kind, column, direction) triple."""

    kind: str
    column: str
    direction: str

    @property
    def order(self) -> str:
        return f"{self.column} {self.direction}"


def set_sort_order(
    column: str | None,
    direction: str | None,
    kind: SortKind | str = SortKind.PROMPT,
) -> SortSpec:
    """Build a SortSpec from request parameters, falling back to ``id DESC``.

    Valid columns are normalised to their whitelisted spelling and directions
    to upper case.
    """
    sort_column = column.lower() if valid_sort_column(column, kind) else DEFAULT_SORT_COLUMN  # type: ignore[union-attr]
    sort_direction = (
        direction.upper() if valid_sort_direction(direction) else DEFAULT_SORT_DIRECTION  # type: ignore[union-attr]
    )
    return SortSpec(kind=str(kind), column=sort_column, direction=sort_direction)
