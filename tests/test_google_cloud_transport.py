import base64
import json
from types import SimpleNamespace

import pytest

from conftest import FakeResponse
from print_transport.exceptions import ConfigurationError, TransportError, UnsupportedMediaError
from print_transport.media import MediaType, RawDocument
from print_transport.media.test_documents import ZebraCardTestDocument
from print_transport.transports import GoogleCloudTransport, OAuthTokenCache, TransportContext
from print_transport.transports import context as context_module


class StaticTokens:
    def __init__(self, token='ya29.token', error=None):
        self._token = token
        self._error = error

    def token(self):
        if self._error:
            raise self._error
        return self._token


def _transport(**context):
    context.setdefault('token_cache', StaticTokens())
    return GoogleCloudTransport('zebra-lobby', context=TransportContext(**context))


def test_submit(fake_session):
    fake_session.response = FakeResponse(json.dumps({'success': True}))

    result = _transport(verify_tls='/etc/ssl/ca.pem').print_media(ZebraCardTestDocument())

    assert result.was_successful(), result.get_data()
    post = fake_session.posts[0]
    assert post['headers'] == {'Authorization': 'OAuth ya29.token'}
    assert post['verify'] == '/etc/ssl/ca.pem'
    assert post['data'] == {
        'printerid': 'zebra-lobby',
        'title': 'Zebra Card Test Document',
        'contentTransferEncoding': 'base64',
        'content': base64.b64encode(b'Zebra Card Test').decode('ascii'),
        'contentType': 'text/plain',
    }


def test_rejected_submission_keeps_message(fake_session):
    fake_session.response = FakeResponse(json.dumps({'success': False, 'message': 'Printer offline'}))

    result = _transport().print_media(ZebraCardTestDocument())

    assert not result.was_successful()
    assert result.get_data()['message'] == 'Printer offline'


def test_invalid_json(fake_session):
    fake_session.response = FakeResponse('<html>oops</html>', status_code=500)

    result = _transport().print_media(ZebraCardTestDocument())

    assert not result.was_successful()
    assert result.get_data()['exception_type'] == 'UnexpectedDeviceResponseError'


def test_token_failure_is_captured(fake_session):
    tokens = StaticTokens(error=TransportError('No access token in credentials response'))

    result = _transport(token_cache=tokens).print_media(ZebraCardTestDocument())

    assert not result.was_successful()
    assert fake_session.posts == []


def test_requires_document_info(fake_session):
    media = RawDocument('card', MediaType.NAMETAG_CARD)
    with pytest.raises(UnsupportedMediaError):
        _transport().print_media(media)


def test_raw_document_with_info(fake_session):
    fake_session.response = FakeResponse(json.dumps({'success': True}))
    media = RawDocument(b'%PDF-1.4', MediaType.NAMETAG_CARD, 'Badge', 'application/pdf')

    assert _transport().print_media(media).was_successful()
    assert fake_session.posts[0]['data']['content'] == base64.b64encode(b'%PDF-1.4').decode('ascii')
    assert fake_session.posts[0]['verify'] is True


def test_construction_requires_address_and_tokens():
    with pytest.raises(ConfigurationError):
        GoogleCloudTransport('', context=TransportContext(token_cache=StaticTokens()))
    with pytest.raises(ConfigurationError):
        GoogleCloudTransport('zebra-lobby', context=TransportContext())

    # development mode never needs tokens
    transport = GoogleCloudTransport('zebra-lobby', context=TransportContext(dummy_mode=True))
    assert transport.print_media(ZebraCardTestDocument()).was_successful()


class FakeCredentials:
    def __init__(self):
        self.valid = False
        self.token = None
        self.refreshes = 0

    def refresh(self, request):
        self.refreshes += 1
        self.token = f'token-{self.refreshes}'
        self.valid = True


def test_token_cache_refreshes_only_when_invalid(monkeypatch):
    credentials = FakeCredentials()
    loaded = []

    def from_service_account_file(path, scopes=None):
        loaded.append((path, scopes))
        return credentials

    monkeypatch.setattr(context_module, 'service_account', SimpleNamespace(
        Credentials=SimpleNamespace(from_service_account_file=from_service_account_file)
    ))
    monkeypatch.setattr(context_module, 'Request', lambda: None)

    cache = OAuthTokenCache('/secrets/key.json', scopes=['scope-a'])

    assert cache.token() == 'token-1'
    assert cache.token() == 'token-1'
    assert loaded == [('/secrets/key.json', ['scope-a'])]

    credentials.valid = False
    assert cache.token() == 'token-2'


def test_token_cache_without_key_file():
    with pytest.raises(ConfigurationError):
        OAuthTokenCache(None).token()
