"""Custom comparators."""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from typing import Any, Optional

import sqlalchemy as sa
from sqlalchemy.ext.hybrid import Comparator

from ..globals import get_sqids
from ..sqids import Sqids, SqidsError

__all__ = ['SplitIndexComparator', 'SqlSqidComparator']


class SplitIndexComparator(Comparator):
    """Base class for comparators that split a string and compare with one part."""

    def __init__(
        self,
        expression: Any,
        splitindex: Optional[int] = None,
        separator: str = '-',
    ) -> None:
        super().__init__(expression)
        self.splitindex = splitindex
        self.separator = separator

    def _decode(self, other: str) -> Any:
        raise NotImplementedError

    def __eq__(self, other: object) -> sa.ColumnElement[bool]:  # type: ignore[override]
        try:
            other = self._decode(other)  # type: ignore[arg-type]
        except (ValueError, TypeError):
            # If other could not be decoded, we do not match.
            return sa.sql.expression.false()
        return self.__clause_element__() == other  # type: ignore[return-value]

    is_ = __eq__  # type: ignore[assignment]

    def __ne__(self, other: object) -> sa.ColumnElement[bool]:  # type: ignore[override]
        try:
            other = self._decode(other)  # type: ignore[arg-type]
        except (ValueError, TypeError):
            # If other could not be decoded, we are not equal.
            return sa.sql.expression.true()
        return self.__clause_element__() != other  # type: ignore[return-value]

    isnot = __ne__  # type: ignore[assignment]
    is_not = __ne__  # type: ignore[assignment]

    def in_(self, other: Any) -> sa.ColumnElement[bool]:  # type: ignore[override]
        """Check if self is present in the other."""

        def errordecode(otherlist: Any) -> Iterator[Any]:
            for val in otherlist:
                with contextlib.suppress(ValueError, TypeError):
                    yield self._decode(val)

        valid_values = list(errordecode(other))
        if not valid_values:
            # If none of the elements could be decoded, return false
            return sa.sql.expression.false()

        return self.__clause_element__().in_(valid_values)  # type: ignore[attr-defined]


class SqlSqidComparator(SplitIndexComparator):
    """
    Given a Sqid string, decode the integer id and allow comparisons on it.

    The id must be the canonical encoding of a single number. Also supports
    ``text-sqid``, ``sqid-text`` or other specific locations for the Sqid if
    specified as a `splitindex` parameter to the constructor.

    :param sqids: :class:`~sqidlib.sqids.Sqids` instance to decode with. If not
        specified, :obj:`~sqidlib.app.current_sqids` is used when the query is built
    """

    def __init__(
        self,
        expression: Any,
        sqids: Optional[Sqids] = None,
        splitindex: Optional[int] = None,
        separator: str = '-',
    ) -> None:
        super().__init__(expression, splitindex, separator)
        self.sqids = sqids

    def _decode(self, other: Optional[str]) -> Optional[int]:
        if other is None:
            return None
        if not isinstance(other, str):
            raise TypeError(f"Sqid must be a string, got {other!r}")
        if self.splitindex is not None:
            try:
                other = other.split(self.separator)[self.splitindex]
            except IndexError:
                raise ValueError(f"{other!r} is not a valid Sqid") from None
        sqids = self.sqids if self.sqids is not None else get_sqids()
        try:
            numbers = sqids.decode(other)
            if len(numbers) != 1 or sqids.encode(numbers) != other:
                raise ValueError(f"{other!r} is not a valid Sqid")
        except SqidsError as exc:
            raise ValueError(f"{other!r} is not a valid Sqid") from exc
        return numbers[0]
