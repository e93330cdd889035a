"""Shared fixtures: Bento clients wired to httpx.MockTransport doubles."""

from collections.abc import Callable

import httpx
import pytest

from bento import BentoClient
from helpers import PUBLISHABLE_KEY, SECRET_KEY, SITE_UUID


def forbid_network(request: httpx.Request) -> httpx.Response:
    pytest.fail(f"unexpected request: {request.method} {request.url}")


@pytest.fixture
def make_client():
    clients: list[BentoClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> BentoClient:
        client = BentoClient(
            publishable_key=PUBLISHABLE_KEY,
            secret_key=SECRET_KEY,
            site_uuid=SITE_UUID,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def offline_client(make_client):
    """A client whose transport fails the test if it is ever called."""
    return make_client(forbid_network)
