"""Reusable fixtures for sqidlib tests."""

# pylint: disable=redefined-outer-name

from __future__ import annotations

import pytest
from flask import Flask

from sqidlib import Sqids
from sqidlib.app import init_app


@pytest.fixture
def sqids() -> Sqids:
    """Sqids with the default configuration."""
    return Sqids()


@pytest.fixture
def app() -> Flask:
    """Flask app configured with Sqids, padding ids to eight characters."""
    _app = Flask(__name__)
    _app.config['SQIDS_MIN_LENGTH'] = 8
    init_app(_app)
    return _app
