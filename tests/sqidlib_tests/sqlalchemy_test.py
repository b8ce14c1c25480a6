"""Tests for the SQLAlchemy mixin and comparator."""

# pylint: disable=redefined-outer-name

from __future__ import annotations

import typing as t

import pytest
import sqlalchemy as sa
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from sqidlib import MAX_VALUE, Sqids
from sqidlib.sqlalchemy import SqidMixin, SqlSqidComparator

custom_sqids = Sqids(alphabet='0123456789abcdef', blocklist=[])


class Model(DeclarativeBase):
    """Model base class for test models."""


db = SQLAlchemy(metadata=Model.metadata)


class Post(SqidMixin, Model):
    """Model using the app's Sqids."""

    __tablename__ = 'post'
    id: Mapped[int] = mapped_column(primary_key=True)  # noqa: A003
    title: Mapped[str] = mapped_column(sa.Unicode(250))


class Document(SqidMixin, Model):
    """Model with its own Sqids."""

    __tablename__ = 'document'
    __sqids__ = custom_sqids
    id: Mapped[int] = mapped_column(primary_key=True)  # noqa: A003
    name: Mapped[str] = mapped_column(sa.Unicode(250))


@pytest.fixture
def session(app: Flask) -> t.Iterator[sa.orm.Session]:
    """Database session in an app context, with a few rows."""
    app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
    db.init_app(app)
    with app.app_context():
        db.create_all()
        db.session.add_all(
            [Post(id=i, title=f"Post {i}") for i in range(1, 6)]
            + [Document(id=i, name=f"Doc {i}") for i in range(1, 4)]
        )
        db.session.commit()
        yield db.session
        db.session.rollback()
        db.drop_all()


def test_sqid_property(app: Flask, session: sa.orm.Session) -> None:
    """The sqid property encodes the id with the model's Sqids."""
    post = session.get(Post, 1)
    assert post is not None
    assert post.sqid == app.extensions['sqids'].encode([1])
    assert len(post.sqid) == 8
    document = session.get(Document, 1)
    assert document is not None
    assert document.sqid == custom_sqids.encode([1])
    assert Document.sqids() is custom_sqids
    with app.app_context():
        assert Post.sqids() is app.extensions['sqids']


def test_sqid_unsaved() -> None:
    """An object without an id has no sqid."""
    assert Post(title="Unsaved").sqid is None


def test_sqid_setter(session: sa.orm.Session) -> None:
    """Setting the sqid sets the id."""
    document = Document(name="New")
    document.sqid = custom_sqids.encode([99])
    assert document.id == 99
    with pytest.raises(ValueError, match="not a valid Sqid"):
        document.sqid = custom_sqids.encode([1, 2])
    with pytest.raises(ValueError, match="not a valid Sqid"):
        document.sqid = 'xyz'
    # Padded and overflowing ids decode, but are not canonical for this model
    padded = Sqids(alphabet='0123456789abcdef', min_length=10, blocklist=[])
    with pytest.raises(ValueError, match="not a valid Sqid"):
        document.sqid = padded.encode([99])
    overflow = custom_sqids.encode([MAX_VALUE])
    with pytest.raises(ValueError, match="not a valid Sqid"):
        document.sqid = overflow + overflow[1]
    assert document.id == 99


def test_query_by_sqid(app: Flask, session: sa.orm.Session) -> None:
    """Models can be queried by sqid."""
    sqid = app.extensions['sqids'].encode([3])
    post = session.scalars(sa.select(Post).where(Post.sqid == sqid)).one()
    assert post.id == 3
    others = session.scalars(sa.select(Post).where(Post.sqid != sqid)).all()
    assert {p.id for p in others} == {1, 2, 4, 5}
    document = session.scalars(
        sa.select(Document).where(Document.sqid == custom_sqids.encode([2]))
    ).one()
    assert document.id == 2


def test_query_by_invalid_sqid(app: Flask, session: sa.orm.Session) -> None:
    """Invalid sqids match nothing, and mismatch everything."""
    overflow = app.extensions['sqids'].encode([MAX_VALUE])
    for invalid in [
        'not-a-sqid',
        app.extensions['sqids'].encode([1, 2]),
        overflow + overflow[1],
        Sqids().encode([1]),  # Not canonical for this app's min length
    ]:
        assert session.scalars(sa.select(Post).where(Post.sqid == invalid)).all() == []
        assert (
            len(session.scalars(sa.select(Post).where(Post.sqid != invalid)).all())
            == 5
        )
    assert session.scalars(sa.select(Post).where(Post.sqid == 3)).all() == []


def test_query_in(app: Flask, session: sa.orm.Session) -> None:
    """Invalid sqids are dropped from an IN query."""
    sqids = app.extensions['sqids']
    posts = session.scalars(
        sa.select(Post).where(
            Post.sqid.in_([sqids.encode([2]), sqids.encode([4]), 'invalid!'])
        )
    ).all()
    assert {p.id for p in posts} == {2, 4}
    assert (
        session.scalars(sa.select(Post).where(Post.sqid.in_(['invalid!']))).all()
        == []
    )


def test_comparator_splitindex(app: Flask, session: sa.orm.Session) -> None:
    """The sqid can be extracted from a string with other text."""
    sqids = app.extensions['sqids']
    comparator = SqlSqidComparator(Post.id, splitindex=-1, separator='~')
    post = session.scalars(
        sa.select(Post).where(comparator == 'my-post~' + sqids.encode([5]))
    ).one()
    assert post.id == 5


def test_comparator_splitindex_missing_separator(
    app: Flask, session: sa.orm.Session
) -> None:
    """A value without the separator is treated as an invalid sqid."""
    sqids = app.extensions['sqids']
    comparator = SqlSqidComparator(Post.id, splitindex=1, separator='~')
    assert session.scalars(sa.select(Post).where(comparator == 'nosep')).all() == []
    assert len(session.scalars(sa.select(Post).where(comparator != 'nosep')).all()) == 5
    posts = session.scalars(
        sa.select(Post).where(comparator.in_(['nosep', 'x~' + sqids.encode([2])]))
    ).all()
    assert [p.id for p in posts] == [2]
    assert (
        session.scalars(sa.select(Post).where(comparator.in_(['nosep']))).all() == []
    )
