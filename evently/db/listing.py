"""Filtered, sorted, paginated reads.

Each list endpoint describes its table once as a ``ListQuery`` and then calls
``run()`` with the filter conditions it built from the request. ``run()``
issues two statements with the same predicate: a COUNT for the pagination
metadata and the page itself with ORDER BY / LIMIT / OFFSET. They are not
wrapped in a shared snapshot, so concurrent writes can make the count and the
page disagree slightly.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from sqlalchemy import func
from sqlalchemy.orm import Session

from .pagination import PageInfo, PageRequest
from .sorting import SortOrder, SortSpec, parse_sort_field

logger = logging.getLogger(__name__)

class ListQuery:
    """Describes how one table is listed.

    Args:
        entity: Mapped class (or column) the page rows are built from
        primary_key: Primary key column, used for COUNT and as sort tiebreaker
        default_sort: Column to order by when no valid `sort_by` is given
        default_order: Direction used when `sort_order` is missing or invalid
        sort_fields: Allow-list enum of `sort_by` tokens (optional)
        sort_columns: Mapping from each enum member to its column
    """

    def __init__(
        self,
        entity: Any,
        primary_key: Any,
        default_sort: Any,
        default_order: SortOrder = SortOrder.DESC,
        sort_fields: Optional[Type] = None,
        sort_columns: Optional[Dict[Any, Any]] = None
    ):
        self.entity = entity
        self.primary_key = primary_key
        self.default_sort = default_sort
        self.default_order = default_order
        self.sort_fields = sort_fields
        self.sort_columns = sort_columns or {}

        if sort_fields is not None:
            missing = [field for field in sort_fields if field not in self.sort_columns]
            if missing:
                raise ValueError(f"No column mapped for sort fields: {missing}")

    def sort_spec(self, sort_by: Optional[str] = None, sort_order: Optional[str] = None) -> SortSpec:
        """Resolve raw `sort_by` / `sort_order` values against the allow-list.

        An unknown `sort_by` is ignored and the default column is used.
        """
        field = parse_sort_field(self.sort_fields, sort_by) if self.sort_fields else None
        if sort_by and field is None:
            logger.debug(f"Ignoring unsupported sort_by value {sort_by!r}")
        column = self.sort_columns[field] if field is not None else self.default_sort
        return SortSpec(
            column=column,
            order=SortOrder.parse(sort_order, self.default_order),
            tiebreaker=self.primary_key,
        )

    def run(
        self,
        session: Session,
        page_request: PageRequest,
        conditions: Sequence[Any] = (),
        sort: Optional[SortSpec] = None,
        extra_columns: Sequence[Any] = (),
        joins: Sequence[Tuple[Any, Any]] = ()
    ) -> Tuple[List[Any], PageInfo]:
        """Run the COUNT and the page query.

        Args:
            session: Open database session
            page_request: Window to fetch
            conditions: Filter expressions, AND-ed together; values are bound parameters
            sort: Ordering; defaults to ``sort_spec()`` with no client input
            extra_columns: Additional columns selected next to the entity
                           (rows are then tuples)
            joins: (target, onclause) pairs applied to both queries

        Returns:
            The page rows and its pagination metadata
        """
        sort = sort or self.sort_spec()

        count_query = session.query(func.count(self.primary_key)).select_from(self.entity)
        data_query = session.query(self.entity, *extra_columns)
        for target, onclause in joins:
            count_query = count_query.join(target, onclause)
            data_query = data_query.join(target, onclause)
        if conditions:
            count_query = count_query.filter(*conditions)
            data_query = data_query.filter(*conditions)

        total = count_query.scalar() or 0
        rows = (
            data_query
            .order_by(*sort.clauses())
            .limit(page_request.limit)
            .offset(page_request.offset)
            .all()
        )
        return rows, PageInfo.build(page_request, total)
