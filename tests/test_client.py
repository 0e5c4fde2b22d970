import base64

import pytest
import requests

from conftest import FakeResponse
from print_transport.client import PrintClient


class _Calls(list):
    reply: list


@pytest.fixture
def calls(monkeypatch):
    recorded = _Calls()

    def fake(method):
        def _call(url, **kwargs):
            recorded.append({'method': method, 'url': url, **kwargs})
            return FakeResponse(recorded_reply[0])
        return _call

    recorded_reply = ['{"success": true}']
    for method in ('get', 'post', 'put', 'delete'):
        monkeypatch.setattr(requests, method, fake(method))

    recorded.reply = recorded_reply
    return recorded


@pytest.fixture
def client():
    return PrintClient('http://printhost:5100/', api_key='secret')


def test_add_printer(calls, client):
    client.add_printer('Warehouse', 'cab', location='Dock 3', host='10.0.0.20', username='u')

    call = calls[0]
    assert call['method'] == 'post'
    assert call['url'] == 'http://printhost:5100/api/printers'
    assert call['headers']['Authorization'] == 'Bearer secret'
    assert call['json'] == {
        'name': 'Warehouse',
        'kind': 'cab',
        'location': 'Dock 3',
        'config': {'host': '10.0.0.20', 'username': 'u'},
        'api_key': 'secret',
    }


def test_print_payload_bytes_are_base64(calls, client):
    client.print_payload('ABC', b'\x1b@', media_type=2, title='Receipt', content_type='text/plain')

    sent = calls[0]['json']
    assert calls[0]['url'].endswith('/api/printers/ABC/print')
    assert sent['payload_base64'] == base64.b64encode(b'\x1b@').decode()
    assert 'payload' not in sent
    assert (sent['media_type'], sent['title'], sent['content_type']) == (2, 'Receipt', 'text/plain')


def test_print_payload_text(calls, client):
    client.print_payload('ABC', '<text>x</text>', media_type=2)
    assert calls[0]['json']['payload'] == '<text>x</text>'


def test_update_printer(calls, client):
    client.update_printer('ABC', config={'port': 8008}, name='Bar 2')

    assert calls[0]['method'] == 'put'
    assert calls[0]['json'] == {'name': 'Bar 2', 'config': {'port': 8008}, 'api_key': 'secret'}


def test_list_jobs_params(calls, client):
    calls.reply[0] = '{"success": true, "jobs": [{"id": "JOB-1"}]}'

    jobs = client.list_jobs(printer_id='ABC', limit=5)

    assert jobs == [{'id': 'JOB-1'}]
    assert calls[0]['params'] == {'limit': 5, 'printer_id': 'ABC'}


def test_is_online(calls, client):
    calls.reply[0] = '{"status": "online"}'
    assert client.is_online()


def test_get_missing_printer(calls, client):
    calls.reply[0] = '{"success": false, "error": "Printer not found"}'
    assert client.get_printer('NOPE') is None


def test_connection_error(monkeypatch, client):
    def refuse(url, **kwargs):
        raise requests.exceptions.ConnectionError()

    monkeypatch.setattr(requests, 'get', refuse)

    assert client.health() == {'success': False, 'error': 'Cannot connect to http://printhost:5100'}
    assert client.list_printers() == []


def test_non_json_reply(calls, client):
    calls.reply[0] = '<html>Bad Gateway</html>'
    assert client.health()['success'] is False
