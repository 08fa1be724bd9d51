from __future__ import annotations

import json

import httpx
import pytest

from barber_booking.infrastructure.cache.revalidate_client import RevalidatePageCache

ENDPOINT = "https://frontend.test/api/revalidate"


def _cache(handler, secret="s3cret"):
    requests = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(record))
    return RevalidatePageCache(endpoint=ENDPOINT, secret=secret, client=client), requests


def test_posts_the_public_path_with_bearer_secret():
    cache, requests = _cache(lambda request: httpx.Response(200, json={"revalidated": True}))

    cache.invalidate("corner-cuts")

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT
    assert json.loads(request.content) == {"path": "/corner-cuts"}
    assert request.headers["Authorization"] == "Bearer s3cret"


def test_no_authorization_header_without_secret():
    cache, requests = _cache(lambda request: httpx.Response(204), secret=None)

    cache.invalidate("corner-cuts")

    assert "Authorization" not in requests[0].headers


@pytest.mark.parametrize("status", [401, 500])
def test_error_responses_raise(status):
    cache, _ = _cache(lambda request: httpx.Response(status, text="nope"))

    with pytest.raises(httpx.HTTPStatusError):
        cache.invalidate("corner-cuts")
