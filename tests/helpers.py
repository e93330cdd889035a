"""Credentials and a recording transport handler shared by the test modules."""

import json

import httpx

PUBLISHABLE_KEY = "pk_test_0123456789abcdef01234567"
SECRET_KEY = "sk_test_89abcdef0123456789abcdef"
SITE_UUID = "3f2a9c4e-8b1d-4e6f-a2c7-5d9e0b1f4a63"


class Recorder:
    """Transport handler that records requests and replies with a fixed response."""

    def __init__(self, body=None, status_code: int = 200, headers: dict[str, str] | None = None):
        self.body = {} if body is None else body
        self.status_code = status_code
        self.headers = headers or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)
