import json

import pytest
import requests


class StubResponse:
    def __init__(self, body, status_code: int = 200):
        self.status_code = status_code
        self.text = body if isinstance(body, str) else json.dumps(body)

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status={self.status_code}", response=self)


class StubSession:
    """requests.Session 대신 주입: 요청 URL 을 기록하고 준비된 본문을 돌려준다."""

    def __init__(self, body=None, status_code: int = 200, exc: Exception | None = None):
        self.body = body
        self.status_code = status_code
        self.exc = exc
        self.urls: list[str] = []
        self.timeouts: list = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        self.timeouts.append(timeout)
        if self.exc is not None:
            raise self.exc
        return StubResponse(self.body, self.status_code)


@pytest.fixture
def stub_session():
    return StubSession
