from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import structlog

from holdermap.config import settings
from holdermap.config.chains import dexscreener_chain_id, resolve_chain
from holdermap.core.dto import HolderMapData, ListingInfo, MapMetadata
from holdermap.core.errors import UnsupportedChainError
from holdermap.core.models import FusedTokenRecord, ProviderResult
from holdermap.core.parsing import round_half_up
from holdermap.ports.holder_map_port import HolderMapPort
from holdermap.ports.listing_port import ListingPort
from holdermap.ports.market_data_port import MarketDataPort
from holdermap.services.cluster_detector import detect_top_clusters
from holdermap.services.concentration import compute_concentration
from holdermap.services.market_merge import aggregate_pairs

logger = structlog.get_logger(__name__)


MAP_DATA = "map_data"
MAP_METADATA = "map_metadata"
MARKET = "market"
LISTING = "listing"

PROVIDERS: Tuple[str, ...] = (MAP_DATA, MAP_METADATA, MARKET, LISTING)

# Ordered sources per fused field; the first source holding a value wins.
FIELD_SOURCES: Dict[str, Tuple[str, ...]] = {
    # identity / links
    "name": (MAP_DATA, MARKET, LISTING),
    "ticker": (MAP_DATA, MARKET, LISTING),
    "website_url": (MAP_DATA, MARKET, LISTING),
    "twitter_url": (MAP_DATA, MARKET, LISTING),
    "telegram_url": (MAP_DATA, MARKET, LISTING),
    "ds_url": (MARKET,),
    "cg_url": (LISTING,),
    # market
    "price": (MARKET,),
    "daily_price_chg_pct": (MARKET,),
    "market_cap": (MARKET,),
    "total_dex_liq": (MARKET,),
    "daily_dex_vol": (MARKET,),
    "daily_dex_txs": (MARKET,),
    "lp_launch_date": (MARKET,),
    # holder map
    "circ_supply": (MAP_DATA,),
    "group_sizes": (MAP_DATA,),
    "wallet_pct": (MAP_DATA,),
    "holder_pct": (MAP_DATA,),
    "top_clusters": (MAP_DATA,),
    "bm_map_data_timestamp": (MAP_DATA,),
    # map metadata
    "decentralisation_score": (MAP_METADATA,),
    "cex_supply_pct": (MAP_METADATA,),
    "contracts_supply_pct": (MAP_METADATA,),
    "bm_map_metadata_timestamp": (MAP_METADATA,),
}


# -------------------------
# Provider payload -> fused field names
# -------------------------

def holder_fields(
    map_data: HolderMapData,
    group_sizes: Sequence[int] = settings.HOLDER_GROUP_SIZES,
    top_cluster_count: int = settings.TOP_CLUSTER_COUNT,
) -> Dict[str, Any]:
    stats = compute_concentration(map_data.nodes, group_sizes)
    return {
        "name": map_data.name,
        "ticker": map_data.symbol,
        "circ_supply": stats.circ_supply,
        "group_sizes": stats.group_sizes,
        "wallet_pct": stats.wallet_pct,
        "holder_pct": stats.holder_pct,
        "top_clusters": detect_top_clusters(map_data, limit=top_cluster_count),
        "bm_map_data_timestamp": map_data.dt_update,
    }


def metadata_fields(meta: Optional[MapMetadata]) -> Dict[str, Any]:
    if meta is None:
        return {}
    return {
        "decentralisation_score": meta.decentralisation_score,
        "cex_supply_pct": meta.cex_supply_pct,
        "contracts_supply_pct": meta.contracts_supply_pct,
        "bm_map_metadata_timestamp": meta.dt_update,
    }


def listing_fields(info: ListingInfo) -> Dict[str, Any]:
    homepage = info.homepages[0] if info.homepages else None
    return {
        "cg_url": f"{settings.COINGECKO_SITE_URL}/{info.listing_id}",
        "name": info.name,
        "ticker": info.symbol.upper() if info.symbol else None,
        "website_url": homepage or None,
        "twitter_url": f"https://x.com/{info.twitter_screen_name}" if info.twitter_screen_name else None,
        "telegram_url": (
            f"https://t.me/{info.telegram_channel_identifier}"
            if info.telegram_channel_identifier
            else None
        ),
    }


# -------------------------
# Merge
# -------------------------

def _present(value: Any) -> bool:
    return value is not None and value != ""


def resolve_field(field: str, results: Dict[str, ProviderResult]) -> Any:
    for source in FIELD_SOURCES.get(field, ()):
        res = results.get(source)
        if res is None or not res.ok:
            continue
        value = res.fields.get(field)
        if _present(value):
            return value
    return None


def apply_market_cap_override(record: FusedTokenRecord, excluded_chains: Iterable[str]) -> None:
    """
    Re-derive market cap from the holder-implied supply and the market price.
    Chains listed in `excluded_chains` keep the aggregator's figure.
    """
    if not record.circ_supply or not record.price:
        return
    if record.chain_id in set(excluded_chains):
        logger.debug("market_cap_override_skipped", chain=record.chain_id)
        return
    record.market_cap = round_half_up(Decimal(record.circ_supply) * Decimal(record.price))


def merge_provider_results(
    chain_id: str,
    token_address: str,
    results: Iterable[ProviderResult],
    excluded_chains: Iterable[str] = settings.MARKET_CAP_OVERRIDE_EXCLUDED_CHAINS,
) -> FusedTokenRecord:
    by_provider = {r.provider: r for r in results}
    record = FusedTokenRecord(chain_id=chain_id, token_address=token_address)

    for field in FIELD_SOURCES:
        value = resolve_field(field, by_provider)
        if value is not None:
            setattr(record, field, value)

    for name in PROVIDERS:
        res = by_provider.get(name)
        if res is None:
            continue
        if not res.ok:
            record.failed_sources.append(name)
        elif res.fields:
            record.sources.append(name)

    apply_market_cap_override(record, excluded_chains)
    return record


# -------------------------
# Service
# -------------------------

class TokenFusionService:
    """
    Fans out to the holder, market and listing providers at once and folds
    whatever came back into one FusedTokenRecord.

    - Each fetch is isolated: an exception becomes a failed ProviderResult.
    - The join waits for every fetch and never raises.
    - The merge is a pure function of the settled results.
    """

    def __init__(
        self,
        holders: HolderMapPort,
        market: MarketDataPort,
        listing: ListingPort,
        group_sizes: Sequence[int] = settings.HOLDER_GROUP_SIZES,
        top_cluster_count: int = settings.TOP_CLUSTER_COUNT,
        excluded_chains: Optional[Iterable[str]] = None,
    ) -> None:
        self.holders = holders
        self.market = market
        self.listing = listing
        self._group_sizes = tuple(group_sizes)
        self._top_cluster_count = top_cluster_count
        self._excluded_chains: FrozenSet[str] = frozenset(
            settings.MARKET_CAP_OVERRIDE_EXCLUDED_CHAINS if excluded_chains is None else excluded_chains
        )

    @classmethod
    def with_default_adapters(cls) -> "TokenFusionService":
        from holdermap.adapters.holders.bubblemaps_adapter import BubblemapsAdapter
        from holdermap.adapters.listing.coingecko_adapter import CoinGeckoAdapter
        from holdermap.adapters.market.dexscreener_adapter import DexScreenerAdapter

        return cls(holders=BubblemapsAdapter(), market=DexScreenerAdapter(), listing=CoinGeckoAdapter())

    async def fuse(self, chain_id: str, token_address: str) -> FusedTokenRecord:
        chain = resolve_chain(chain_id) or chain_id
        results = await self.fetch_all(chain, token_address)
        record = merge_provider_results(chain, token_address, results, self._excluded_chains)
        logger.info(
            "token_fused",
            chain=chain,
            token=token_address,
            sources=record.sources,
            failed=record.failed_sources,
        )
        return record

    async def fetch_all(self, chain_id: str, token_address: str) -> List[ProviderResult]:
        settled = await asyncio.gather(
            self._settle(MAP_DATA, self._fetch_map_data, chain_id, token_address),
            self._settle(MAP_METADATA, self._fetch_map_metadata, chain_id, token_address),
            self._settle(MARKET, self._fetch_market, chain_id, token_address),
            self._settle(LISTING, self._fetch_listing, chain_id, token_address),
        )
        return list(settled)

    async def _settle(
        self,
        provider: str,
        fetch: Callable[[str, str], Dict[str, Any]],
        chain_id: str,
        token_address: str,
    ) -> ProviderResult:
        try:
            fields = await asyncio.to_thread(fetch, chain_id, token_address)
        except Exception as exc:
            error = f"{exc.__class__.__name__}: {exc}"
            logger.warning("provider_failed", provider=provider, chain=chain_id, token=token_address, error=error)
            return ProviderResult.failure(provider, error)
        return ProviderResult(provider=provider, fields=fields)

    # --- blocking fetches, run off the event loop ---

    def _fetch_map_data(self, chain_id: str, token_address: str) -> Dict[str, Any]:
        map_data = self.holders.get_map_data(chain_id, token_address)
        return holder_fields(map_data, self._group_sizes, self._top_cluster_count)

    def _fetch_map_metadata(self, chain_id: str, token_address: str) -> Dict[str, Any]:
        return metadata_fields(self.holders.get_map_metadata(chain_id, token_address))

    def _fetch_market(self, chain_id: str, token_address: str) -> Dict[str, Any]:
        dex_chain = dexscreener_chain_id(chain_id)
        if not dex_chain:
            raise UnsupportedChainError(f"No DexScreener chain for: {chain_id}")
        return aggregate_pairs(self.market.search_pairs(token_address), dex_chain)

    def _fetch_listing(self, chain_id: str, token_address: str) -> Dict[str, Any]:
        return listing_fields(self.listing.get_listing(chain_id, token_address))


def fuse_token(
    chain_id: str,
    token_address: str,
    service: Optional[TokenFusionService] = None,
) -> FusedTokenRecord:
    svc = service or TokenFusionService.with_default_adapters()
    return asyncio.run(svc.fuse(chain_id, token_address))
