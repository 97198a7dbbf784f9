from __future__ import annotations

from typing import Any, List, Optional, Tuple

import requests

from holdermap.adapters.http_client import JsonHttpClient
from holdermap.config import settings
from holdermap.core.dto import DexScreenerPair
from holdermap.core.errors import DataSourceError
from holdermap.core.parsing import to_decimal, to_int, to_unix_seconds
from holdermap.ports.market_data_port import MarketDataPort


class DexScreenerAdapter(JsonHttpClient, MarketDataPort):

    provider_name = "dexscreener"

    def __init__(
        self,
        base_url: str = settings.DEXSCREENER_BASE_URL,
        requests_per_sec: float = settings.DEXSCREENER_REQUESTS_PER_SEC,
        timeout_sec: int = settings.DEXSCREENER_TIMEOUT_SEC,
        max_retries: int = settings.DEXSCREENER_MAX_RETRIES,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            requests_per_sec=requests_per_sec,
            timeout_sec=timeout_sec,
            max_retries=max_retries,
            session=session,
        )

    def search_pairs(self, query: str) -> List[DexScreenerPair]:
        data = self._call("search", {"q": query})
        if not isinstance(data, dict):
            raise DataSourceError(f"Invalid DexScreener response: {data!r}")
        pairs = data.get("pairs") if isinstance(data.get("pairs"), list) else []
        out: List[DexScreenerPair] = []
        for p in pairs:
            if not isinstance(p, dict):
                continue
            out.append(self._pair(p))
        return out

    def _pair(self, p: dict) -> DexScreenerPair:
        base = p.get("baseToken") or {}
        txns_24h = (p.get("txns") or {}).get("h24") or {}
        info = p.get("info") or {}
        return DexScreenerPair(
            chain_id=str(p.get("chainId") or ""),
            base_token=str(base.get("address") or ""),
            base_name=base.get("name") or None,
            base_symbol=base.get("symbol") or None,
            price_usd=to_decimal(p.get("priceUsd")),
            market_cap=to_decimal(p.get("marketCap")),
            price_change_24h=to_decimal((p.get("priceChange") or {}).get("h24")),
            liquidity_usd=to_decimal((p.get("liquidity") or {}).get("usd")),
            volume_24h=to_decimal((p.get("volume") or {}).get("h24")),
            buys_24h=to_int(txns_24h.get("buys")),
            sells_24h=to_int(txns_24h.get("sells")),
            pair_created_at=to_unix_seconds(p.get("pairCreatedAt")),
            url=p.get("url") or None,
            websites=self._labelled(info.get("websites"), "label"),
            socials=self._labelled(info.get("socials"), "type"),
        )

    @staticmethod
    def _labelled(raw: Any, key: str) -> Tuple[Tuple[str, str], ...]:
        if not isinstance(raw, list):
            return ()
        out = []
        for item in raw:
            if not isinstance(item, dict) or not item.get("url"):
                continue
            out.append((str(item.get(key) or ""), str(item["url"])))
        return tuple(out)
