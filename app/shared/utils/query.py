# 📄 File: app/shared/utils/query.py

# 🧭 Purpose (Layman Explanation):
# Turns the "page", "limit", "sort" and "search" options a client puts in a list URL
# into the exact database question to ask, without ever crashing on odd input.

# 🧪 Purpose (Technical Summary):
# Query Builder: parses raw pagination/sort/search query-string values with safe numeric
# fallback, and applies them to a SQLAlchemy select as ORDER BY/OFFSET/LIMIT plus an
# OR-group of case-insensitive substring matches.

# 🔗 Dependencies:
# - sqlalchemy (select, or_, ColumnElement)
# - fastapi (Query parameters for the list dependency)
# - app.shared.config.settings (page size defaults)

# 🔄 Connected Modules / Calls From:
# Used by: app.shared.infrastructure.database.base_repository (paginate),
# every list route (Depends(get_list_params))

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from fastapi import Query
from sqlalchemy import Select, or_
from sqlalchemy.sql.elements import ColumnElement

from app.shared.config.settings import get_settings
from app.shared.utils.helpers import safe_int

DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_DEPTH = 1
MAX_DEPTH = 2


@dataclass(frozen=True)
class QueryParams:
    """Normalized list options."""

    page: int = 1
    limit: int = 10
    sort: str = DEFAULT_SORT_FIELD
    order: str = "desc"
    search: Optional[str] = None
    depth: int = DEFAULT_DEPTH

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.order != "asc"


def build_query_params(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    search: Optional[str] = None,
    depth: Optional[str] = None,
    default_limit: Optional[int] = None,
    max_limit: Optional[int] = None,
) -> QueryParams:
    """
    Normalize raw query-string values.

    Non-numeric ``page``/``limit``/``depth`` fall back to their defaults, ``page``
    below 1 becomes 1, ``limit`` is capped at ``max_limit``, and any ``order``
    other than ``asc`` means descending.

    Returns:
        QueryParams: Normalized options
    """
    settings = get_settings()
    default_limit = default_limit or settings.DEFAULT_PAGE_LIMIT
    max_limit = max_limit or settings.MAX_PAGE_LIMIT

    page_value = max(safe_int(page, 1), 1)

    limit_value = safe_int(limit, default_limit)
    if limit_value <= 0:
        limit_value = default_limit
    limit_value = min(limit_value, max_limit)

    search_value = search.strip() if search else None

    return QueryParams(
        page=page_value,
        limit=limit_value,
        sort=sort or DEFAULT_SORT_FIELD,
        order="asc" if (order or "").lower() == "asc" else "desc",
        search=search_value or None,
        depth=parse_depth(depth),
    )


def get_list_params(
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size"),
    sort: Optional[str] = Query(None, description="Sort field (default createdAt)"),
    order: Optional[str] = Query(None, description="Sort direction: asc or desc"),
    search: Optional[str] = Query(None, description="Case-insensitive substring filter"),
    depth: Optional[str] = Query(None, description="Relationship expansion depth (0-2)"),
) -> QueryParams:
    """FastAPI dependency wrapping build_query_params."""
    return build_query_params(page, limit, sort, order, search, depth)


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_clause(columns: Sequence[ColumnElement], term: Optional[str]) -> Optional[ColumnElement]:
    """
    Build an OR-group of case-insensitive substring matches.

    Returns:
        The combined clause, or None when there is no search term
    """
    if not term or not columns:
        return None
    pattern = f"%{escape_like(term)}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


def apply_sorting(
    stmt: Select,
    sort_fields: Mapping[str, ColumnElement],
    params: QueryParams,
    tiebreaker: Optional[ColumnElement] = None,
) -> Select:
    """
    Order a select by the requested field; unknown fields fall back to createdAt.
    """
    column = sort_fields.get(params.sort, sort_fields[DEFAULT_SORT_FIELD])
    ordering = [column.desc() if params.descending else column.asc()]
    if tiebreaker is not None:
        ordering.append(tiebreaker.desc() if params.descending else tiebreaker.asc())
    return stmt.order_by(*ordering)


def parse_depth(depth: Optional[str] = None) -> int:
    return min(max(safe_int(depth, DEFAULT_DEPTH), 0), MAX_DEPTH)


def get_depth_param(
    depth: Optional[str] = Query(None, description="Relationship expansion depth (0-2)"),
) -> int:
    """FastAPI dependency for single-record reads."""
    return parse_depth(depth)
