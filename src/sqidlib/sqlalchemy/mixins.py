"""
SQLAlchemy mixin classes
------------------------

:class:`SqidMixin` adds a :attr:`~SqidMixin.sqid` property to a model with an integer
``id`` primary key::

    from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
    from sqidlib.sqlalchemy import SqidMixin

    class Model(DeclarativeBase):
        '''Model base class.'''

    class Post(SqidMixin, Model):
        __tablename__ = 'post'
        id: Mapped[int] = mapped_column(primary_key=True)

    post = session.scalars(select(Post).where(Post.sqid == 'Uk')).one()
    post.sqid  # 'Uk'

Mixin classes must always appear *before* the model base class in your model's base
classes.
"""

# pylint: disable=too-few-public-methods,no-self-argument

from __future__ import annotations

import typing as t

from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import declarative_mixin

from ..globals import get_sqids
from ..sqids import Sqids, SqidsError
from .comparators import SqlSqidComparator

__all__ = ['SqidMixin']


@declarative_mixin
class SqidMixin:
    """
    Provides a :attr:`sqid` attribute, the Sqid encoding of the integer :attr:`id`.

    The :class:`~sqidlib.sqids.Sqids` instance is taken from the :attr:`__sqids__`
    class attribute if set, or from :obj:`~sqidlib.app.current_sqids`.
    """

    #: Sqids instance for this model. If `None`, the current app's instance is used
    __sqids__: t.ClassVar[t.Optional[Sqids]] = None

    @classmethod
    def sqids(cls) -> Sqids:
        """Return the :class:`~sqidlib.sqids.Sqids` instance used by this model."""
        if cls.__sqids__ is not None:
            return cls.__sqids__
        return get_sqids()

    @hybrid_property
    def sqid(self) -> t.Optional[str]:
        """URL-friendly Sqid representation of the id, or `None` if not yet set."""
        if self.id is None:  # type: ignore[attr-defined]
            return None
        return self.sqids().encode([self.id])  # type: ignore[attr-defined]

    @sqid.inplace.setter
    def _sqid_setter(self, value: str) -> None:
        """Set the id from the canonical Sqid of exactly one number."""
        sqids = self.sqids()
        try:
            numbers = sqids.decode(value)
        except SqidsError as exc:
            raise ValueError(f"{value!r} is not a valid Sqid") from exc
        if len(numbers) != 1 or sqids.encode(numbers) != value:
            raise ValueError(f"{value!r} is not a valid Sqid")
        self.id = numbers[0]  # type: ignore[attr-defined]

    @sqid.inplace.comparator
    @classmethod
    def _sqid_comparator(cls) -> SqlSqidComparator:
        """Return SQL comparator for the id in Sqid format."""
        return SqlSqidComparator(
            cls.id,  # type: ignore[attr-defined]
            sqids=cls.__sqids__,
        )
