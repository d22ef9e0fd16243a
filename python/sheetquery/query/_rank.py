"""Dense ranking of rows and row groups.

Dense ranks give tied keys the same rank and the next distinct key the
following integer, so three rows keyed ``3, 5, 3`` rank ``1, 2, 1``.

Keys are ordered the way a spreadsheet sorts a column: numbers, then dates,
then times, then text, then booleans. NaN values tie with each other just
before blank cells, and blanks sort last; both hold in either direction.
Mixed-type columns therefore never raise ``TypeError``.
"""

from __future__ import annotations

import datetime
import decimal
import functools
import math
import numbers
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from sheetquery._errors import InvalidArgumentError
from sheetquery._table import Row, row_value

Extractor = Callable[[Row], Any]

_NAN = (8, 0)
_BLANK = (9, 0)


def order_key(value: Any) -> tuple[int, Hashable]:
    """Map a cell value to a hashable key with spreadsheet sort order."""
    if value is None:
        return _BLANK
    if isinstance(value, bool):
        return (4, value)
    if isinstance(value, decimal.Decimal):
        return _NAN if value.is_nan() else (0, value)
    if isinstance(value, numbers.Real):
        return _NAN if math.isnan(value) else (0, value)
    if isinstance(value, datetime.datetime):
        return (1, value.replace(tzinfo=None))
    if isinstance(value, datetime.date):
        return (1, datetime.datetime.combine(value, datetime.time()))
    if isinstance(value, datetime.time):
        return (2, value.replace(tzinfo=None))
    if isinstance(value, str):
        return (3, value)
    return (5, str(value))


def _compare_keys(a: tuple[int, Hashable], b: tuple[int, Hashable], ascending: bool) -> int:
    if a == b:
        return 0
    # Blanks sort last in both directions, NaN just before them
    for pinned in (_BLANK, _NAN):
        if a == pinned:
            return 1
        if b == pinned:
            return -1
    less = a < b  # type: ignore[operator]
    if not ascending:
        less = not less
    return -1 if less else 1


def _assign_dense(ordered: Sequence[Hashable]) -> dict[Hashable, int]:
    return {key: rank for rank, key in enumerate(ordered, start=1)}


def dense_rank(values: Iterable[Any], *, ascending: bool = True) -> list[int]:
    """Dense rank of each value, aligned with the input order.

    Sort the distinct keys, number them from 1, then map every input value
    back to the number of its key.
    """
    keys = [order_key(v) for v in values]
    distinct = sorted(
        set(keys),
        key=functools.cmp_to_key(lambda a, b: _compare_keys(a, b, ascending)),
    )
    ranks = _assign_dense(distinct)
    return [ranks[k] for k in keys]


# ---------------------------------------------------------------------------
# Sort key specification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SortKey:
    """One component of a composite row ordering."""

    extractor: Extractor
    ascending: bool = True


class SortKeys(tuple):
    """Ordered sort keys, built fluently::

        keys = (order_by(column_key("Type"))
                .then_by(column_key("Length", float))
                .then_by_descending(column_key("HP", float)))
    """

    __slots__ = ()

    def then_by(self, extractor: Extractor) -> SortKeys:
        return SortKeys((*self, SortKey(extractor, True)))

    def then_by_descending(self, extractor: Extractor) -> SortKeys:
        return SortKeys((*self, SortKey(extractor, False)))


def order_by(extractor: Extractor) -> SortKeys:
    return SortKeys((SortKey(extractor, True),))


def order_by_descending(extractor: Extractor) -> SortKeys:
    return SortKeys((SortKey(extractor, False),))


def column_key(name: str, convert: Callable[[Any], Any] | None = None) -> Extractor:
    """Extractor reading column *name*, optionally passed through *convert*."""
    if convert is None:
        def extract(row: Row) -> Any:
            return row_value(row, name)
    else:
        def extract(row: Row) -> Any:
            return convert(row_value(row, name))
    extract.__name__ = f"column_key[{name}]"
    return extract


def _coerce_keys(keys: Sequence[SortKey | Extractor]) -> tuple[SortKey, ...]:
    out: list[SortKey] = []
    for k in keys:
        if isinstance(k, SortKey):
            out.append(k)
        elif callable(k):
            out.append(SortKey(k))
        else:
            raise InvalidArgumentError(f"Not a sort key or extractor: {k!r}")
    return tuple(out)


# ---------------------------------------------------------------------------
# Rank engines
# ---------------------------------------------------------------------------


def rank_groups(
    rows: Iterable[Row],
    key: Extractor,
    *,
    ascending: bool = True,
) -> list[tuple[Row, int]]:
    """Group rows by ``key(row)`` and dense-rank the groups by key value.

    Returns ``(row, rank)`` pairs: groups in first-seen order, rows in their
    original order inside each group. Ranks depend only on key values, not on
    the order groups were first seen.
    """
    groups: dict[tuple[int, Hashable], list[Row]] = {}
    for row in rows:
        groups.setdefault(order_key(key(row)), []).append(row)

    distinct = sorted(
        groups,
        key=functools.cmp_to_key(lambda a, b: _compare_keys(a, b, ascending)),
    )
    ranks = _assign_dense(distinct)
    return [(row, ranks[k]) for k, members in groups.items() for row in members]


def rank_rows(rows: Iterable[Row], keys: Sequence[SortKey | Extractor]) -> list[int]:
    """Dense rank of each row under a composite, lexicographic ordering.

    *keys* are compared in order; each may be ascending or descending. Rows
    whose full key tuples are equal share a rank. The result is aligned with
    the input: ``result[i]`` is the rank of ``rows[i]``.

    Bare callables in *keys* are treated as ascending sort keys.
    """
    sort_keys = _coerce_keys(keys)
    if not sort_keys:
        raise InvalidArgumentError("rank_rows requires at least one sort key")

    tuples = [tuple(order_key(s.extractor(row)) for s in sort_keys) for row in rows]

    def compare(a: tuple, b: tuple) -> int:
        for sk, ka, kb in zip(sort_keys, a, b):
            c = _compare_keys(ka, kb, sk.ascending)
            if c:
                return c
        return 0

    distinct = sorted(set(tuples), key=functools.cmp_to_key(compare))
    ranks = _assign_dense(distinct)
    return [ranks[t] for t in tuples]
