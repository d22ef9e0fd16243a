"""sheetquery.query - slicing, distinct counting, lookup and ranking over Tables."""

from sheetquery.query._distinct import count_distinct, distinct_values
from sheetquery.query._lookup import (
    NOT_FOUND,
    Comparator,
    case_insensitive,
    exact,
    is_not_found,
    lookup,
    numeric,
    vlookup,
)
from sheetquery.query._rank import (
    SortKey,
    SortKeys,
    column_key,
    dense_rank,
    order_by,
    order_by_descending,
    order_key,
    rank_groups,
    rank_rows,
)
from sheetquery.query._slice import column_range, slice_rows

__all__ = [
    "Comparator",
    "NOT_FOUND",
    "SortKey",
    "SortKeys",
    "case_insensitive",
    "column_key",
    "column_range",
    "count_distinct",
    "dense_rank",
    "distinct_values",
    "exact",
    "is_not_found",
    "lookup",
    "numeric",
    "order_by",
    "order_by_descending",
    "order_key",
    "rank_groups",
    "rank_rows",
    "slice_rows",
    "vlookup",
]
