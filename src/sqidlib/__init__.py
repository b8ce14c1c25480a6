"""
Sqids for Python
================

Sqids generate short, URL-safe ids from one or more non-negative integers, and
decode them back. Ids are not sequential, so database ids can be exposed in URLs
without making them trivially guessable. This is obfuscation, not encryption.

Usage::

    from sqidlib import Sqids

    sqids = Sqids()
    sqids.encode([1, 2, 3])  # '86Rf07'
    sqids.decode('86Rf07')  # [1, 2, 3]

Flask apps can use :func:`sqidlib.app.init_app` to configure an instance from app
config, and SQLAlchemy models can use :class:`sqidlib.sqlalchemy.SqidMixin`.
"""
# flake8: noqa

from ._version import *
from .blocklist import DEFAULT_BLOCKLIST, load_blocklist
from .sqids import *
