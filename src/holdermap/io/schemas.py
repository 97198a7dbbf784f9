from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from holdermap.core.models import FusedTokenRecord


def _dec_to_str(x: Optional[Decimal]) -> Optional[str]:
    # keep as string for JSON precision safety
    return format(x, "f") if x is not None else None


def _pct_map(pcts: Optional[Dict[int, Decimal]]) -> Optional[Dict[str, str]]:
    if pcts is None:
        return None
    return {str(g): _dec_to_str(v) for g, v in pcts.items()}


def record_to_dict(r: FusedTokenRecord) -> Dict[str, Any]:
    return {
        "chain_id": r.chain_id,
        "token_address": r.token_address,
        "name": r.name,
        "ticker": r.ticker,
        "links": {
            "website": r.website_url,
            "twitter": r.twitter_url,
            "telegram": r.telegram_url,
            "dexscreener": r.ds_url,
            "coingecko": r.cg_url,
        },
        "market": {
            "price": _dec_to_str(r.price),
            "daily_price_chg_pct": _dec_to_str(r.daily_price_chg_pct),
            "market_cap": r.market_cap,
            "total_dex_liq": r.total_dex_liq,
            "daily_dex_vol": r.daily_dex_vol,
            "daily_dex_txs": r.daily_dex_txs,
            "lp_launch_date": r.lp_launch_date,
        },
        "holders": {
            "circ_supply": r.circ_supply,
            "group_sizes": list(r.group_sizes) if r.group_sizes is not None else None,
            "wallet_pct": _pct_map(r.wallet_pct),
            "holder_pct": _pct_map(r.holder_pct),
            "top_clusters": (
                [
                    {
                        "addresses": sorted(c.addresses),
                        "total_amount": _dec_to_str(c.total_amount),
                    }
                    for c in r.top_clusters
                ]
                if r.top_clusters is not None
                else None
            ),
            "map_data_timestamp": r.bm_map_data_timestamp,
        },
        "metadata": {
            "decentralisation_score": _dec_to_str(r.decentralisation_score),
            "cex_supply_pct": _dec_to_str(r.cex_supply_pct),
            "contracts_supply_pct": _dec_to_str(r.contracts_supply_pct),
            "map_metadata_timestamp": r.bm_map_metadata_timestamp,
        },
        "sources": list(r.sources),
        "failed_sources": list(r.failed_sources),
    }
