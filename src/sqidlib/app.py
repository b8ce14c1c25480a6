"""
App configuration
=================

Configure Sqids for a Flask app with :func:`init_app`::

    from flask import Flask
    import sqidlib.app

    app = Flask(__name__)
    app.config['SQIDS_MIN_LENGTH'] = 8
    sqidlib.app.init_app(app)

These config keys are recognized. All are optional:

* ``SQIDS_ALPHABET``: Alphabet to use (default
  :data:`~sqidlib.sqids.DEFAULT_ALPHABET`)
* ``SQIDS_MIN_LENGTH``: Minimum length of ids (default 0)
* ``SQIDS_BLOCKLIST``: List of words to block, replacing the default blocklist
* ``SQIDS_BLOCKLIST_FILE``: File with more words to block, relative to the app's
  root path. Supports ``.txt``, ``.json``, ``.yaml`` and ``.toml`` files (YAML and
  TOML need PyYAML_ and a TOML parser). Words in this file are combined with
  ``SQIDS_BLOCKLIST`` and also replace the default blocklist

.. _PyYAML: https://pypi.org/project/PyYAML/
"""

from __future__ import annotations

import os
import typing as t

from flask import Flask

from .blocklist import load_blocklist
from .globals import current_sqids
from .sqids import DEFAULT_ALPHABET, Sqids
from .views import SqidConverter

__all__ = ['current_sqids', 'init_app', 'load_blocklist_from_file']


def load_blocklist_from_file(app: Flask, filepath: str) -> t.Optional[t.List[str]]:
    """Load blocklist words from a file relative to the app's root path."""
    try:
        return load_blocklist(os.path.join(app.root_path, filepath))
    except OSError:
        app.logger.warning(
            "Did not find blocklist file %s, skipping it",
            filepath,
        )
        return None


def sqid_filter(value: t.Union[int, t.Sequence[int]]) -> str:
    """Jinja filter that encodes a number or a list of numbers."""
    if isinstance(value, int):
        value = [value]
    return current_sqids.encode(value)


def init_app(app: Flask) -> Sqids:
    """
    Configure Sqids for an app.

    Creates a :class:`Sqids` instance from app config and stores it in
    ``app.extensions['sqids']``, where it is available as :obj:`current_sqids`.
    Also registers the :class:`~sqidlib.views.SqidConverter` URL converter and the
    ``sqid`` Jinja filter.

    :raises ~sqidlib.sqids.ConfigurationError: If the config is invalid
    """
    blocklist: t.Optional[t.List[str]] = None
    if app.config.get('SQIDS_BLOCKLIST') is not None:
        blocklist = list(app.config['SQIDS_BLOCKLIST'])
    if app.config.get('SQIDS_BLOCKLIST_FILE'):
        file_words = load_blocklist_from_file(app, app.config['SQIDS_BLOCKLIST_FILE'])
        if file_words is not None:
            blocklist = (blocklist or []) + file_words

    sqids = Sqids(
        alphabet=app.config.get('SQIDS_ALPHABET', DEFAULT_ALPHABET),
        min_length=app.config.get('SQIDS_MIN_LENGTH', 0),
        blocklist=blocklist,
    )
    app.extensions['sqids'] = sqids
    app.url_map.converters['sqid'] = SqidConverter
    app.jinja_env.filters['sqid'] = sqid_filter
    app.jinja_env.globals['current_sqids'] = current_sqids
    app.logger.debug("Configured Sqids for app %s: %r", app.name, sqids)
    return sqids
