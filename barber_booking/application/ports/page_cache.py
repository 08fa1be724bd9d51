from abc import ABC, abstractmethod


class PageCachePort(ABC):
    @abstractmethod
    def invalidate(self, slug: str) -> None:
        """Drop cached copies of the public booking page of a barbershop."""
        raise NotImplementedError
