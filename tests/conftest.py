# Ensure the repository root is on sys.path so `print_transport` can be imported in tests.

import sys
from pathlib import Path


def _ensure_repo_root_on_syspath() -> None:
    here = Path(__file__).resolve()
    repo_root = here.parent.parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_root_on_syspath()

import ftplib  # noqa: E402
from typing import Any, Dict, List  # noqa: E402

import pytest  # noqa: E402
import requests  # noqa: E402

from print_transport.printers import CABPrinterConfig  # noqa: E402


class FakeFTP:
    """Stand-in for ftplib.FTP that records what the transport does."""

    maxline = 8192
    instances: List['FakeFTP'] = []
    fail_on: Dict[str, BaseException] = {}

    def __init__(self, timeout=None):
        self.timeout = timeout
        self.calls: List[str] = []
        self.host = None
        self.port = None
        self.user = None
        self.passwd = None
        self.passive = None
        self.trust_server_pasv_ipv4_address = True
        self.stored: Dict[str, bytes] = {}
        self.closed = False
        FakeFTP.instances.append(self)

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on[name]

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.closed = True

    def connect(self, host, port, timeout=None):
        self._maybe_fail('connect')
        self.host = host
        self.port = port

    def login(self, user='', passwd=''):
        self._maybe_fail('login')
        self.user = user
        self.passwd = passwd

    def set_pasv(self, value):
        self.passive = value

    def storbinary(self, cmd, fp):
        self._maybe_fail('storbinary')
        self.stored[cmd] = fp.read()

    def storlines(self, cmd, fp):
        self._maybe_fail('storlines')
        lines = []
        while True:
            # same limit as ftplib.FTP.storlines
            line = fp.readline(self.maxline + 1)
            if len(line) > self.maxline:
                raise ftplib.Error(f'got more than {self.maxline} bytes')
            if not line:
                break
            lines.append(line)
        self.stored[cmd] = b''.join(lines)


@pytest.fixture
def fake_ftp(monkeypatch):
    FakeFTP.instances = []
    FakeFTP.fail_on = {}
    monkeypatch.setattr('print_transport.transports.ftp.FTP', FakeFTP)
    return FakeFTP


class FakeResponse:
    def __init__(self, text='', status_code=200):
        self.text = text
        self.status_code = status_code

    def json(self):
        import json
        return json.loads(self.text)


class FakeSession:
    """Stand-in for requests.Session; answers every post with a canned response."""

    response: Any = None
    error: Any = None
    posts: List[Dict[str, Any]] = []
    closed = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        FakeSession.closed += 1

    def post(self, url, **kwargs):
        FakeSession.posts.append({'url': url, **kwargs})
        if FakeSession.error is not None:
            raise FakeSession.error
        return FakeSession.response


@pytest.fixture
def fake_session(monkeypatch):
    FakeSession.response = FakeResponse()
    FakeSession.error = None
    FakeSession.posts = []
    FakeSession.closed = 0
    monkeypatch.setattr(requests, 'Session', FakeSession)
    return FakeSession


class FakePrompter:
    """Replays canned answers; None means 'accept the default'."""

    def __init__(self, answers=None, choices=None):
        self.answers = list(answers or [])
        self.choices = list(choices or [])
        self.questions: List[str] = []

    def ask(self, question, default=None):
        self.questions.append(question)
        answer = self.answers.pop(0)
        return default if answer is None else answer

    def choice(self, question, choices, default=None):
        self.questions.append(question)
        answer = self.choices.pop(0)
        assert answer is None or answer in choices
        return default if answer is None else answer


@pytest.fixture
def cab_config():
    return CABPrinterConfig(
        host='10.0.0.20',
        username='ftpprint',
        password='print',
        width=20,
        height=-1,
        heat=75,
    )


@pytest.fixture
def prompter():
    return FakePrompter
