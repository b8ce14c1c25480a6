"""Context globals."""

from __future__ import annotations

import typing as t

from flask import current_app, has_app_context
from werkzeug.local import LocalProxy

from .sqids import Sqids

__all__ = ['current_sqids', 'default_sqids', 'get_sqids']

#: Used when there is no app context, or the app has not been configured
default_sqids = Sqids()


def get_sqids() -> Sqids:
    """Return the :class:`Sqids` instance for the current app, or the default."""
    if has_app_context():
        return current_app.extensions.get('sqids', default_sqids)
    return default_sqids


#: Proxy to the current app's :class:`Sqids` instance
current_sqids: Sqids = t.cast(Sqids, LocalProxy(get_sqids))
