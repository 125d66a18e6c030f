"""テスト共通のフェイク"""

import json

import httplib2
import httpx
import pytest
from googleapiclient.errors import HttpError


def make_http_error(status: int, message: str = "error") -> HttpError:
    """googleapiclient の HttpError を生成"""
    content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
    return HttpError(resp=httplib2.Response({"status": status}), content=content)


class FakeRequest:
    def __init__(self, outcome):
        self.outcome = outcome

    def execute(self):
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


class FakeCollection:
    def __init__(self, name: str, service: "FakeGoogleService"):
        self.name = name
        self.service = service

    def list(self, **params):
        self.service.calls.append((self.name, params))
        return FakeRequest(self.service.handlers[self.name](params))


class FakeGoogleService:
    """
    googleapiclient の Resource の代わり

    handlers: コレクション名 → (list() の引数 dict) → レスポンス dict または例外
    """

    def __init__(self, **handlers):
        self.handlers = handlers
        self.calls: list[tuple[str, dict]] = []
        self.builds: list[tuple] = []

    def __getattr__(self, name):
        if name in self.handlers:
            return lambda: FakeCollection(name, self)
        raise AttributeError(name)

    def factory(self, service: str, version: str, api_key: str, timeout_sec: float):
        self.builds.append((service, version, api_key, timeout_sec))
        return self


@pytest.fixture
def http_error():
    return make_http_error


@pytest.fixture
def fake_google():
    return FakeGoogleService


@pytest.fixture
def mock_httpx(monkeypatch):
    """httpx.Client の通信を MockTransport のハンドラに差し替える"""

    def install(handler):
        real_client = httpx.Client

        def client_factory(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(handler)
            return real_client(*args, **kwargs)

        monkeypatch.setattr(httpx, "Client", client_factory)

    return install
