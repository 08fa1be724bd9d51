from __future__ import annotations

import logging

import httpx

from barber_booking.application.ports.page_cache import PageCachePort


class RevalidatePageCache(PageCachePort):
    """Asks the web frontend to rebuild the public page of a barbershop."""

    def __init__(self, endpoint: str, secret: str | None = None, client: httpx.Client | None = None) -> None:
        self._endpoint = endpoint
        self._secret = secret
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def invalidate(self, slug: str) -> None:
        payload = {"path": f"/{slug}"}
        headers = {"Authorization": f"Bearer {self._secret}"} if self._secret else {}
        resp = self._client.post(self._endpoint, json=payload, headers=headers)
        if resp.status_code >= 400:
            self._logger.error(
                "Page revalidation failed",
                extra={"code": resp.status_code, "reason": resp.text[:200]},
            )
            resp.raise_for_status()
