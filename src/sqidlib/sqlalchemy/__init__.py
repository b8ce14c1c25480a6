"""
SQLAlchemy patterns
===================

Sqids helpers for SQLAlchemy models: a mixin that adds a :attr:`sqid` property to
models with an integer primary key, and a comparator that allows queries on it.

All are importable from the :mod:`sqidlib.sqlalchemy` namespace.
"""
# flake8: noqa

# SQLAlchemy doesn't import sub-modules into the main namespace automatically, so we
# we must make these imports to allow sa.orm.* and sa.ext.* to work:
import sqlalchemy
import sqlalchemy.ext  # skipcq: PY-W2000
import sqlalchemy.ext.hybrid  # skipcq: PY-W2000
import sqlalchemy.orm  # skipcq: PY-W2000

from .comparators import *
from .mixins import *
