from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


# Holder analysis

@dataclass(frozen=True)
class Cluster:
    """
    Maximal set (2+) of linked non-contract holders, with their summed amount.
    """

    addresses: FrozenSet[str]
    total_amount: Decimal


@dataclass(frozen=True)
class ConcentrationStats:

    group_sizes: Tuple[int, ...]
    wallet_pct: Dict[int, Decimal]      # contracts included
    holder_pct: Dict[int, Decimal]      # contracts excluded
    circ_supply: Optional[int] = None



# Provider fan-out

@dataclass(frozen=True)
class ProviderResult:
    """
    Settled outcome of one provider fetch: normalized fields or the error text.
    """

    provider: str
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, provider: str, error: str) -> "ProviderResult":
        return cls(provider=provider, fields={}, error=error)



# Fused output

@dataclass
class FusedTokenRecord:

    chain_id: str
    token_address: str

    # identity / links
    name: Optional[str] = None
    ticker: Optional[str] = None
    website_url: Optional[str] = None
    twitter_url: Optional[str] = None
    telegram_url: Optional[str] = None
    ds_url: Optional[str] = None
    cg_url: Optional[str] = None

    # market
    price: Optional[Decimal] = None
    daily_price_chg_pct: Optional[Decimal] = None
    market_cap: Optional[int] = None
    total_dex_liq: Optional[int] = None
    daily_dex_vol: Optional[int] = None
    daily_dex_txs: Optional[int] = None
    lp_launch_date: Optional[int] = None

    # holder map
    circ_supply: Optional[int] = None
    group_sizes: Optional[Tuple[int, ...]] = None
    wallet_pct: Optional[Dict[int, Decimal]] = None
    holder_pct: Optional[Dict[int, Decimal]] = None
    top_clusters: Optional[List[Cluster]] = None
    bm_map_data_timestamp: Optional[int] = None

    # map metadata
    decentralisation_score: Optional[Decimal] = None
    cex_supply_pct: Optional[Decimal] = None
    contracts_supply_pct: Optional[Decimal] = None
    bm_map_metadata_timestamp: Optional[int] = None

    sources: List[str] = field(default_factory=list)
    failed_sources: List[str] = field(default_factory=list)
