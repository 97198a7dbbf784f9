from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class HolderNode:
    address: str
    amount: Optional[Decimal]          # token quantity as reported
    percentage: Optional[Decimal]      # share of supply, 0-100
    is_contract: bool = False


@dataclass(frozen=True)
class HolderLink:
    source: int                        # index into HolderMapData.nodes
    target: int


@dataclass(frozen=True)
class HolderMapData:
    nodes: List[HolderNode]
    links: List[HolderLink] = field(default_factory=list)
    token_links: List[List[HolderLink]] = field(default_factory=list)
    dt_update: Optional[int] = None    # unix seconds
    name: Optional[str] = None
    symbol: Optional[str] = None


@dataclass(frozen=True)
class MapMetadata:
    decentralisation_score: Optional[Decimal]
    cex_supply_pct: Optional[Decimal]
    contracts_supply_pct: Optional[Decimal]
    dt_update: Optional[int] = None


@dataclass(frozen=True)
class DexScreenerPair:
    chain_id: str
    base_token: str
    base_name: Optional[str]
    base_symbol: Optional[str]
    price_usd: Optional[Decimal]
    market_cap: Optional[Decimal]
    price_change_24h: Optional[Decimal]
    liquidity_usd: Optional[Decimal]
    volume_24h: Optional[Decimal]
    buys_24h: Optional[int]
    sells_24h: Optional[int]
    pair_created_at: Optional[int]     # unix seconds
    url: Optional[str] = None
    websites: Tuple[Tuple[str, str], ...] = ()   # (label, url)
    socials: Tuple[Tuple[str, str], ...] = ()    # (type, url)


@dataclass(frozen=True)
class ListingInfo:
    listing_id: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    homepages: Tuple[str, ...] = ()
    twitter_screen_name: Optional[str] = None
    telegram_channel_identifier: Optional[str] = None
