"""
Value objects exchanged with the learning path search engine.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .settings import SORTABLE_FIELDS, SearchDefaults

log = logging.getLogger(__name__)

SORT_ASC = "asc"
SORT_DESC = "desc"

LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int(value: Any) -> int | None:
    """
    Parse an integer from user input.

    Strings are read like JavaScript's `parseInt(value, 10)`: the leading integer is
    used and the rest ignored, so "12abc" and "2.5" give 12 and 2.
    Returns None when there is no leading integer or the value is not a string or an int.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = LEADING_INT_RE.match(value)
        return int(match.group(1)) if match else None
    return None


@dataclass(frozen=True)
class FilterSpec:
    """
    Criteria a learning path must satisfy to be part of a search result.

    Empty fields are ignored; the remaining ones are combined with AND.
    `user_id` is only set for authenticated callers and only feeds the relevance filter.
    """

    category: str | None = None
    difficulty: str | None = None
    search: str | None = None
    ai_relevance: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class PaginationSpec:
    """
    Page, limit and sort parameters as received from the caller.

    Values may be raw (strings, None, out of range); call `normalize` before use.
    """

    page: Any = None
    limit: Any = None
    sort_by: Any = None
    sort_order: Any = None

    def normalize(self, defaults: SearchDefaults) -> "PaginationSpec":
        """
        Return a copy with every field clamped or defaulted.

        * page: integers below 1 and non-integers become the default page.
        * limit: integers below 1 and non-integers become the default limit; larger
          values are capped at `max_limit`.
        * sort_by: unknown fields fall back to the default sort field.
        * sort_order: only the exact string "asc" is ascending.
        """
        page = parse_int(self.page)
        if page is None or page < 1:
            page = defaults.page

        limit = parse_int(self.limit)
        if limit is None or limit < 1:
            limit = defaults.limit
        limit = min(limit, defaults.max_limit)

        sort_by = self.sort_by
        if sort_by is None:
            sort_by = defaults.sort_by
        elif sort_by not in SORTABLE_FIELDS:
            log.debug("[LearningPaths] Unknown sort field %r, using %r", sort_by, defaults.sort_by)
            sort_by = defaults.sort_by

        sort_order = defaults.sort_order if self.sort_order is None else self.sort_order
        sort_order = SORT_ASC if sort_order == SORT_ASC else SORT_DESC

        return PaginationSpec(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

    @property
    def offset(self) -> int:
        """Number of records to skip. Only meaningful on a normalized spec."""
        return (self.page - 1) * self.limit


@dataclass
class PageResult:
    """A single page of learning paths plus metadata about the whole matching set."""

    paths: list
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass
class PathStats:
    """Aggregate counts over the whole learning path collection."""

    total: int = 0
    total_steps: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
    by_difficulty: dict[str, int] = field(default_factory=dict)
