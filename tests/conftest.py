import pytest


class FakeResponse:
    """requests.Response 대역"""

    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def echo_service(monkeypatch):
    """POST 본문을 id와 함께 그대로 돌려주는 디자인 서비스"""
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return FakeResponse(201, {"id": f"design-{len(calls)}", **json})

    monkeypatch.setattr("requests.post", fake_post)
    return calls


@pytest.fixture
def failing_service(monkeypatch):
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json})
        return FakeResponse(500, {"error": "boom"})

    monkeypatch.setattr("requests.post", fake_post)
    return calls
