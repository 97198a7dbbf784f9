from __future__ import annotations

from typing import Optional

import requests

from holdermap.adapters.http_client import JsonHttpClient
from holdermap.config import settings
from holdermap.config.chains import coingecko_chain_id
from holdermap.core.dto import ListingInfo
from holdermap.core.errors import DataSourceError, UnsupportedChainError
from holdermap.ports.listing_port import ListingPort


class CoinGeckoAdapter(JsonHttpClient, ListingPort):

    provider_name = "coingecko"

    def __init__(
        self,
        base_url: str = settings.COINGECKO_BASE_URL,
        api_key: Optional[str] = settings.COINGECKO_API_KEY,
        requests_per_sec: float = settings.COINGECKO_REQUESTS_PER_SEC,
        timeout_sec: int = settings.COINGECKO_TIMEOUT_SEC,
        max_retries: int = settings.COINGECKO_MAX_RETRIES,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            requests_per_sec=requests_per_sec,
            timeout_sec=timeout_sec,
            max_retries=max_retries,
            headers={"x-cg-demo-api-key": api_key} if api_key else None,
            session=session,
        )

    def get_listing(self, chain_id: str, token_address: str) -> ListingInfo:
        cg_chain = coingecko_chain_id(chain_id)
        if not cg_chain:
            raise UnsupportedChainError(f"No CoinGecko platform for chain: {chain_id}")

        data = self._call(f"coins/{cg_chain}/contract/{token_address}")
        if not isinstance(data, dict) or not data.get("id"):
            raise DataSourceError(f"Invalid CoinGecko response for {token_address}")

        links = data.get("links") or {}
        homepages = links.get("homepage") if isinstance(links.get("homepage"), list) else []
        return ListingInfo(
            listing_id=str(data["id"]),
            name=data.get("name") or None,
            symbol=data.get("symbol") or None,
            homepages=tuple(str(h) for h in homepages if isinstance(h, str)),
            twitter_screen_name=links.get("twitter_screen_name") or None,
            telegram_channel_identifier=links.get("telegram_channel_identifier") or None,
        )
