from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from holdermap.core.dto import DexScreenerPair


class MarketDataPort(ABC):

    @abstractmethod
    def search_pairs(self, query: str) -> List[DexScreenerPair]:
        raise NotImplementedError
