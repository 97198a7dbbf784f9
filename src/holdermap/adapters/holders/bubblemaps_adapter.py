from __future__ import annotations

from typing import Any, List, Optional

import requests
import structlog

from holdermap.adapters.http_client import JsonHttpClient
from holdermap.config import settings
from holdermap.config.chains import resolve_chain
from holdermap.core.dto import HolderLink, HolderMapData, HolderNode, MapMetadata
from holdermap.core.errors import DataSourceError, UnsupportedChainError
from holdermap.core.parsing import to_decimal, to_int, to_unix_seconds
from holdermap.ports.holder_map_port import HolderMapPort

logger = structlog.get_logger(__name__)


class BubblemapsAdapter(JsonHttpClient, HolderMapPort):

    provider_name = "bubblemaps"

    def __init__(
        self,
        base_url: str = settings.BUBBLEMAPS_BASE_URL,
        requests_per_sec: float = settings.BUBBLEMAPS_REQUESTS_PER_SEC,
        timeout_sec: int = settings.BUBBLEMAPS_TIMEOUT_SEC,
        max_retries: int = settings.BUBBLEMAPS_MAX_RETRIES,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            requests_per_sec=requests_per_sec,
            timeout_sec=timeout_sec,
            max_retries=max_retries,
            session=session,
        )

    @staticmethod
    def _chain(chain_id: str) -> str:
        chain = resolve_chain(chain_id)
        if not chain:
            raise UnsupportedChainError(f"Unknown chain: {chain_id}")
        return chain

    # ---------- port methods ----------

    def get_map_data(self, chain_id: str, token_address: str) -> HolderMapData:
        data = self._call("map-data", {"token": token_address, "chain": self._chain(chain_id)})
        if not isinstance(data, dict):
            raise DataSourceError(f"Invalid Bubblemaps map-data response: {data!r}")

        raw_nodes = data.get("nodes") if isinstance(data.get("nodes"), list) else []
        nodes = [self._node(n) for n in raw_nodes]

        token_links: List[List[HolderLink]] = []
        raw_groups = data.get("token_links") if isinstance(data.get("token_links"), list) else []
        for group in raw_groups:
            if isinstance(group, dict):
                token_links.append(self._links(group.get("links")))

        return HolderMapData(
            nodes=nodes,
            links=self._links(data.get("links")),
            token_links=token_links,
            dt_update=to_unix_seconds(data.get("dt_update")),
            name=data.get("full_name") or None,
            symbol=data.get("symbol") or None,
        )

    def get_map_metadata(self, chain_id: str, token_address: str) -> Optional[MapMetadata]:
        data = self._call("map-metadata", {"chain": self._chain(chain_id), "token": token_address})
        if not isinstance(data, dict):
            raise DataSourceError(f"Invalid Bubblemaps map-metadata response: {data!r}")

        if data.get("status") != "OK":
            logger.info("map_metadata_unavailable", chain=chain_id, token=token_address, status=data.get("status"))
            return None

        identified = data.get("identified_supply") or {}
        return MapMetadata(
            decentralisation_score=to_decimal(data.get("decentralisation_score")),
            cex_supply_pct=to_decimal(identified.get("percent_in_cexs")),
            contracts_supply_pct=to_decimal(identified.get("percent_in_contracts")),
            dt_update=to_unix_seconds(data.get("dt_update")),
        )

    # ---------- payload helpers ----------

    @staticmethod
    def _node(raw: Any) -> HolderNode:
        # keep malformed rows as empty placeholders so link indices stay aligned
        if not isinstance(raw, dict):
            return HolderNode(address="", amount=None, percentage=None, is_contract=False)
        return HolderNode(
            address=str(raw.get("address") or ""),
            amount=to_decimal(raw.get("amount")),
            percentage=to_decimal(raw.get("percentage")),
            is_contract=bool(raw.get("is_contract")),
        )

    @staticmethod
    def _links(raw: Any) -> List[HolderLink]:
        out: List[HolderLink] = []
        if not isinstance(raw, list):
            return out
        for link in raw:
            if not isinstance(link, dict):
                continue
            source = to_int(link.get("source"))
            target = to_int(link.get("target"))
            if source is None or target is None:
                continue
            out.append(HolderLink(source=source, target=target))
        return out


def map_page_url(chain_id: str, token_address: str) -> str:
    chain = resolve_chain(chain_id) or chain_id
    return f"{settings.BUBBLEMAPS_APP_URL}/{chain}/token/{token_address}"


__all__ = ["BubblemapsAdapter", "map_page_url"]
