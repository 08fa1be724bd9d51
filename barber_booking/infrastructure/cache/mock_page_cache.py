from __future__ import annotations

import logging

from barber_booking.application.ports.page_cache import PageCachePort


class MockPageCache(PageCachePort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.invalidated: list[str] = []

    def invalidate(self, slug: str) -> None:
        self.invalidated.append(slug)
        self._logger.info("Mock page revalidation", extra={"reason": slug})
