from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from holdermap.core.dto import HolderMapData, MapMetadata


class HolderMapPort(ABC):
    """
    Abstract Class for the holder-graph provider (nodes, links, map metadata).
    """

    # --- holder graph ---

    @abstractmethod
    def get_map_data(self, chain_id: str, token_address: str) -> HolderMapData:
        raise NotImplementedError

    # --- map metadata (None when the provider has no map for the token) ---

    @abstractmethod
    def get_map_metadata(self, chain_id: str, token_address: str) -> Optional[MapMetadata]:
        raise NotImplementedError
