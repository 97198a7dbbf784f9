from typing import Dict, Optional, Tuple

from holdermap.config.chains import resolve_chain
from holdermap.core.dto import HolderMapData, MapMetadata
from holdermap.core.errors import ProviderNotFoundError
from holdermap.ports.holder_map_port import HolderMapPort


class StaticHolderMapAdapter(HolderMapPort):
    """
    In-memory holder provider keyed by (chain, token address); for dev and tests.
    """

    def __init__(self,
                 maps: Optional[Dict[Tuple[str, str], HolderMapData]] = None,
                 metadata: Optional[Dict[Tuple[str, str], MapMetadata]] = None,
                 ):
        self._maps = {self._key(*k): v for k, v in (maps or {}).items()}
        self._metadata = {self._key(*k): v for k, v in (metadata or {}).items()}

    @staticmethod
    def _key(chain_id, token_address):
        return (resolve_chain(chain_id) or chain_id, token_address.lower())

    def get_map_data(self, chain_id, token_address):
        key = self._key(chain_id, token_address)
        if key not in self._maps:
            raise ProviderNotFoundError(f"No static map for {key}")
        return self._maps[key]

    def get_map_metadata(self, chain_id, token_address):
        return self._metadata.get(self._key(chain_id, token_address))
