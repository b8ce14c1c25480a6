"""Tests for the sqid URL converter."""

# pylint: disable=redefined-outer-name

import typing as t

import pytest
from flask import Flask, url_for
from flask.testing import FlaskClient

from sqidlib import MAX_VALUE


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """App with routes using the sqid converter."""

    @app.route('/post/<sqid:post_id>')
    def post(post_id: int) -> str:
        assert isinstance(post_id, int)
        return f'post {post_id}'

    @app.route('/pair/<sqid(count=2):ids>')
    def pair(ids: t.List[int]) -> str:
        return f'pair {ids[0]} {ids[1]}'

    @app.route('/bundle/<sqid(count=None):ids>')
    def bundle(ids: t.List[int]) -> str:
        return 'bundle ' + ' '.join(str(i) for i in ids)

    return app.test_client()


def test_url_for(app: Flask, client: FlaskClient) -> None:
    """url_for encodes numbers with the app's Sqids."""
    sqids = app.extensions['sqids']
    with app.test_request_context():
        assert url_for('post', post_id=1) == '/post/' + sqids.encode([1])
        assert url_for('pair', ids=[1, 2]) == '/pair/' + sqids.encode([1, 2])
        assert url_for('bundle', ids=(1, 2, 3)) == '/bundle/86Rf07xd'


def test_single_id(app: Flask, client: FlaskClient) -> None:
    """A single-number id converts to an int."""
    sqids = app.extensions['sqids']
    rv = client.get('/post/' + sqids.encode([42]))
    assert rv.status_code == 200
    assert rv.data == b'post 42'


def test_count(app: Flask, client: FlaskClient) -> None:
    """The count of numbers must match the rule."""
    sqids = app.extensions['sqids']
    assert client.get('/pair/' + sqids.encode([4, 5])).data == b'pair 4 5'
    assert client.get('/pair/' + sqids.encode([4])).status_code == 404
    assert client.get('/pair/' + sqids.encode([4, 5, 6])).status_code == 404
    assert client.get('/post/' + sqids.encode([4, 5])).status_code == 404
    assert client.get('/bundle/86Rf07xd').data == b'bundle 1 2 3'
    assert client.get('/bundle/' + sqids.encode([7])).data == b'bundle 7'


def test_invalid_ids(app: Flask, client: FlaskClient) -> None:
    """Ids that do not decode are not found."""
    sqids = app.extensions['sqids']
    assert client.get('/post/not-a-sqid').status_code == 404
    overflow = sqids.encode([MAX_VALUE])
    assert client.get('/post/' + overflow + overflow[1]).status_code == 404


def test_non_canonical_ids(client: FlaskClient) -> None:
    """Ids that decode but are not in canonical form are not found."""
    # Unpadded, while the app pads to eight characters
    assert client.get('/bundle/86Rf07').status_code == 404
    # Extra padding
    assert client.get('/bundle/86Rf07xd4').status_code == 404
    assert client.get('/bundle/86Rf07xd').status_code == 200


def test_invalid_count(app: Flask) -> None:
    """A count below 1 is rejected when the rule is added."""
    with pytest.raises(ValueError, match="at least 1"):
        app.add_url_rule('/zero/<sqid(count=0):ids>', 'zero', lambda ids: '')
