"""Public pages."""

import pytest


def test_index(client):
    response = client.get('/')

    assert response.status_code == 200
    assert b'/verify/gov' in response.data


@pytest.mark.parametrize('message_type', ['success', 'banned', 'error'])
def test_message_pages(client, message_type):
    response = client.get(f'/messages/{message_type}')

    assert response.status_code == 200


def test_unknown_message_goes_home(client):
    response = client.get('/messages/surprise')

    assert response.status_code == 302
    assert response.headers['Location'] == '/'
