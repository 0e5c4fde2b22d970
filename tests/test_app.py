import base64
import json

import pytest

import print_transport.app as app_module
from print_transport.media import MediaType
from print_transport.transports import TransportContext

API_KEY = 'test-key'

CAB = {
    'name': 'Warehouse',
    'kind': 'cab',
    'config': {'host': '10.0.0.20', 'username': 'ftpprint', 'password': 'print'},
}


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, 'DATA_DIR', str(tmp_path))
    monkeypatch.setattr(app_module, 'API_KEY', API_KEY)
    monkeypatch.setattr(app_module, '_printers', {})
    monkeypatch.setattr(app_module, '_jobs', [])
    monkeypatch.setattr(app_module, '_context', TransportContext())

    app_module.app.config.update(TESTING=True)
    return app_module.app.test_client()


def _auth():
    return {'Authorization': f'Bearer {API_KEY}'}


def _add(client, printer):
    r = client.post('/api/printers', json=printer, headers=_auth())
    assert r.status_code == 201, r.get_data(as_text=True)
    return r.get_json()['printer']


def test_health(client):
    body = client.get('/health').get_json()
    assert body['status'] == 'online'
    assert body['printers_registered'] == 0


def test_kinds(client):
    kinds = {k['kind']: k for k in client.get('/api/kinds').get_json()['kinds']}

    assert set(kinds) == {'cab', 'ftp', 'epson', 'zebra_card', 'dummy'}
    assert kinds['cab']['defaults']['type'] == 'e'
    assert kinds['epson']['defaults']['port'] == 80
    assert kinds['zebra_card']['transport'] == 'google_cloud'


def test_add_requires_api_key(client):
    r = client.post('/api/printers', json=CAB)
    assert r.status_code == 401

    r = client.post('/api/printers', json=dict(CAB, api_key=API_KEY))
    assert r.status_code == 201


def test_add_rejects_unknown_kind(client):
    r = client.post('/api/printers', json={'name': 'x', 'kind': 'laser'}, headers=_auth())
    assert r.status_code == 400


def test_add_rejects_invalid_config(client):
    printer = dict(CAB, config={'host': 'printer.local'})
    r = client.post('/api/printers', json=printer, headers=_auth())

    assert r.status_code == 400
    details = r.get_json()['details']
    assert any('host' in d for d in details)
    assert 'username required' in details


def test_add_and_list_hides_password(client, tmp_path):
    printer = _add(client, CAB)

    assert printer['config']['password'] == '********'
    assert printer['config']['width'] == 20

    body = client.get('/api/printers').get_json()
    assert body['count'] == 1

    saved = json.loads((tmp_path / 'printers.json').read_text())
    stored_config = json.loads(saved[printer['id']]['config'])
    assert stored_config['password'] == 'print'


def test_printers_reload_from_storage(client, monkeypatch):
    printer = _add(client, CAB)

    monkeypatch.setattr(app_module, '_printers', {})
    app_module._load_printers()

    assert client.get(f'/api/printers/{printer["id"]}').status_code == 200


def test_update_merges_config(client):
    printer = _add(client, {
        'name': 'Bar',
        'kind': 'epson',
        'config': {'host': '192.168.1.50', 'printer_id': 'local_printer'},
    })

    r = client.put(f'/api/printers/{printer["id"]}',
                   json={'name': 'Bar 2', 'config': {'port': 8008}}, headers=_auth())
    assert r.status_code == 200

    updated = r.get_json()['printer']
    assert updated['name'] == 'Bar 2'
    assert updated['config'] == {
        'host': '192.168.1.50', 'port': 8008, 'printer_id': 'local_printer', 'timeout': 30,
    }


def test_update_rejects_invalid_config(client):
    printer = _add(client, CAB)
    r = client.put(f'/api/printers/{printer["id"]}',
                   json={'config': {'type': 'x'}}, headers=_auth())
    assert r.status_code == 400


@pytest.mark.parametrize('config', [[1, 2], 'host=10.0.0.20', 7])
def test_config_must_be_an_object(client, config):
    r = client.post('/api/printers', json=dict(CAB, config=config), headers=_auth())
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Printer config must be an object'

    printer = _add(client, CAB)
    r = client.put(f'/api/printers/{printer["id"]}', json={'config': config}, headers=_auth())
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Printer config must be an object'
    assert client.get(f'/api/printers/{printer["id"]}').get_json()['printer']['config']['host'] == '10.0.0.20'


def test_body_must_be_an_object(client):
    r = client.post('/api/printers', json=[CAB], headers=_auth())
    assert r.status_code == 400


def test_delete(client):
    printer = _add(client, CAB)

    assert client.delete(f'/api/printers/{printer["id"]}', headers=_auth()).status_code == 200
    assert client.get(f'/api/printers/{printer["id"]}').status_code == 404
    assert client.delete(f'/api/printers/{printer["id"]}', headers=_auth()).status_code == 404


def test_test_print_cab(client, fake_ftp):
    printer = _add(client, CAB)

    r = client.post(f'/api/printers/{printer["id"]}/test', headers=_auth())
    body = r.get_json()

    assert r.status_code == 200
    assert body['success'] is True
    assert body['job']['status'] == 'completed'
    assert body['data']['payload'].startswith('m m\nJ\nH 75\n')

    stored = list(fake_ftp.instances[0].stored.values())[0]
    assert stored.startswith(b'm m\n')

    assert client.get(f'/api/printers/{printer["id"]}').get_json()['printer']['status'] == 'ready'


def test_failed_print_is_reported(client, fake_ftp):
    fake_ftp.fail_on = {'connect': ConnectionRefusedError(111, 'Connection refused')}
    printer = _add(client, CAB)

    body = client.post(f'/api/printers/{printer["id"]}/test', headers=_auth()).get_json()

    assert body['success'] is False
    assert body['job']['status'] == 'failed'
    assert body['job']['error_message'] == 'Connection refused by 10.0.0.20:21'

    record = client.get(f'/api/printers/{printer["id"]}').get_json()['printer']
    assert record['status'] == 'error'


def test_dummy_mode(client, fake_ftp, monkeypatch):
    monkeypatch.setattr(app_module, '_context', TransportContext(dummy_mode=True))
    printer = _add(client, CAB)

    body = client.post(f'/api/printers/{printer["id"]}/test', headers=_auth()).get_json()

    assert body['success'] is True
    assert fake_ftp.instances == []


def test_print_payload_base64(client, fake_ftp):
    printer = _add(client, {
        'name': 'Drop folder',
        'kind': 'ftp',
        'config': {'host': '10.0.0.21', 'username': 'u', 'password': 'p',
                   'transfer_mode': 'binary', 'media_types': 3},
    })

    r = client.post(f'/api/printers/{printer["id"]}/print', headers=_auth(), json={
        'payload_base64': base64.b64encode(b'\x1b@ticket').decode(),
        'media_type': int(MediaType.SERVICE_TICKET),
        'document_name': 'Ticket 7',
    })

    assert r.status_code == 200
    assert r.get_json()['job']['document_name'] == 'Ticket 7'
    assert r.get_json()['job']['media_type'] == int(MediaType.SERVICE_TICKET)
    assert list(fake_ftp.instances[0].stored.values()) == [b'\x1b@ticket']


def test_print_rejects_wrong_media(client, fake_session):
    printer = _add(client, {
        'name': 'Bar',
        'kind': 'epson',
        'config': {'host': '192.168.1.50', 'printer_id': 'local_printer'},
    })

    r = client.post(f'/api/printers/{printer["id"]}/print', headers=_auth(), json={
        'payload': '<text>x</text>',
        'media_type': int(MediaType.BARCODE_LABEL),
    })

    assert r.status_code == 400
    assert r.get_json()['job']['status'] == 'failed'
    assert fake_session.posts == []


def test_print_requires_payload_and_media_type(client):
    printer = _add(client, {'name': 'Null', 'kind': 'dummy', 'config': {}})
    url = f'/api/printers/{printer["id"]}/print'

    assert client.post(url, headers=_auth(), json={'media_type': 1}).status_code == 400
    assert client.post(url, headers=_auth(), json={'payload': 'x'}).status_code == 400
    assert client.post(url, headers=_auth(), json={'payload': 'x', 'media_type': 1}).status_code == 200


def test_cloud_printer_without_credentials(client):
    printer = _add(client, {'name': 'Lobby', 'kind': 'zebra_card', 'config': {'address': 'zebra-lobby'}})

    r = client.post(f'/api/printers/{printer["id"]}/test', headers=_auth())

    assert r.status_code == 400
    assert 'OAuth' in r.get_json()['error']


def test_jobs(client):
    first = _add(client, {'name': 'Null', 'kind': 'dummy', 'config': {}})
    second = _add(client, {'name': 'Null 2', 'kind': 'dummy', 'config': {}})

    client.post(f'/api/printers/{first["id"]}/test', headers=_auth())
    client.post(f'/api/printers/{second["id"]}/test', headers=_auth())
    client.post(f'/api/printers/{second["id"]}/test', headers=_auth())

    assert client.get('/api/jobs').get_json()['count'] == 3
    assert client.get('/api/jobs?limit=1').get_json()['count'] == 1

    jobs = client.get(f'/api/jobs?printer_id={second["id"]}').get_json()['jobs']
    assert len(jobs) == 2
    assert all(j['job_type'] == 'test' for j in jobs)
