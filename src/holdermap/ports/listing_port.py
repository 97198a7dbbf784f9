from __future__ import annotations

from abc import ABC, abstractmethod

from holdermap.core.dto import ListingInfo


class ListingPort(ABC):
    @abstractmethod
    def get_listing(self, chain_id: str, token_address: str) -> ListingInfo:
        raise NotImplementedError
