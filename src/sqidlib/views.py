"""
URL converter
-------------

:func:`sqidlib.app.init_app` registers :class:`SqidConverter` as ``sqid``, for use
in URL rules::

    @app.route('/post/<sqid:post_id>')
    def post(post_id: int): ...

    @app.route('/compare/<sqid(count=2):post_ids>')
    def compare(post_ids: list[int]): ...

    @app.route('/bundle/<sqid(count=None):post_ids>')
    def bundle(post_ids: list[int]): ...
"""

from __future__ import annotations

import typing as t

from werkzeug.routing import BaseConverter, Map, ValidationError

from .globals import get_sqids
from .sqids import SqidsError

__all__ = ['SqidConverter']


class SqidConverter(BaseConverter):
    """
    Match a Sqid in a URL and convert it into a number or a list of numbers.

    Only the canonical form of an id will match. Ids that decode to nothing, to the
    wrong count of numbers, or that do not re-encode to the same id are rejected,
    so that each resource has exactly one URL.

    :param count: Count of numbers in the id. If 1 (the default), the converted value
        is an integer. For any other count, or `None` for any count, it is a list
    """

    def __init__(self, url_map: Map, count: t.Optional[int] = 1) -> None:
        super().__init__(url_map)
        if count is not None and count < 1:
            raise ValueError("Count must be at least 1")
        self.count = count

    def to_python(self, value: str) -> t.Union[int, t.List[int]]:
        """Decode the id, raising :exc:`ValidationError` if it does not match."""
        sqids = get_sqids()
        try:
            numbers = sqids.decode(value)
            if not numbers or (self.count is not None and len(numbers) != self.count):
                raise ValidationError()
            if sqids.encode(numbers) != value:
                raise ValidationError()
        except SqidsError:
            raise ValidationError() from None
        if self.count == 1:
            return numbers[0]
        return numbers

    def to_url(self, value: t.Union[int, t.Sequence[int]]) -> str:
        """Encode a number or a list of numbers for use in a URL."""
        if isinstance(value, int):
            value = [value]
        return super().to_url(get_sqids().encode(value))
