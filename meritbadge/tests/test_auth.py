from unittest import mock

import pytest
import requests

from meritbadge.auth.supabase import AuthUser, SessionExpiredError, SupabaseAuthClient
from meritbadge.config.auth import SupabaseAuthConfig

@pytest.fixture
def auth_client():
    return SupabaseAuthClient(SupabaseAuthConfig(url='https://project.supabase.co/', anon_key='anon'))

def fake_response(status_code, payload=None):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    return response

def test_get_user_calls_user_endpoint(auth_client):
    with mock.patch('meritbadge.auth.supabase.requests.get',
                    return_value=fake_response(200, {'id': 'abc', 'email': 'scout@example.org'})) as get:
        user = auth_client.get_user('token')

    assert user == AuthUser(id='abc', email='scout@example.org')
    url = get.call_args.args[0]
    headers = get.call_args.kwargs['headers']
    assert url == 'https://project.supabase.co/auth/v1/user'
    assert headers == {'apikey': 'anon', 'Authorization': 'Bearer token'}

def test_get_user_expired_token(auth_client):
    with mock.patch('meritbadge.auth.supabase.requests.get', return_value=fake_response(401)):
        with pytest.raises(SessionExpiredError):
            auth_client.get_user('token')

def test_get_user_server_error_is_none(auth_client):
    with mock.patch('meritbadge.auth.supabase.requests.get', return_value=fake_response(500)):
        assert auth_client.get_user('token') is None

def test_get_user_network_error_is_none(auth_client):
    with mock.patch('meritbadge.auth.supabase.requests.get',
                    side_effect=requests.ConnectionError('unreachable')):
        assert auth_client.get_user('token') is None

def test_get_user_payload_without_id_is_none(auth_client):
    with mock.patch('meritbadge.auth.supabase.requests.get', return_value=fake_response(200, {'email': 'x'})):
        assert auth_client.get_user('token') is None

def test_missing_configuration_raises(monkeypatch):
    monkeypatch.delenv('SUPABASE_URL', raising=False)
    monkeypatch.delenv('SUPABASE_ANON_KEY', raising=False)

    with pytest.raises(ValueError):
        SupabaseAuthClient().get_user('token')
