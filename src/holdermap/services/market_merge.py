from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from holdermap.core.dto import DexScreenerPair
from holdermap.core.parsing import round_half_up


def _first_labelled(entries, label: str) -> Optional[str]:
    for key, url in entries:
        if key.lower() == label:
            return url
    return None


def aggregate_pairs(pairs: Iterable[DexScreenerPair], dex_chain_id: Optional[str]) -> Dict[str, Any]:
    """
    Collapse every pair listed for the token on one chain into a single
    market view.

    Identity and links come from the first pair that has them, price from
    the first priced pair, market cap is the largest seen, liquidity, volume
    and tx counts are summed, launch date is the oldest pair.
    """
    matching: List[DexScreenerPair] = [p for p in pairs if dex_chain_id and p.chain_id == dex_chain_id]
    out: Dict[str, Any] = {}
    if not matching:
        return out

    def _keep_first(field: str, value: Any) -> None:
        if value is not None and value != "" and out.get(field) is None:
            out[field] = value

    market_cap: Optional[Decimal] = None
    liquidity: Optional[Decimal] = None
    volume: Optional[Decimal] = None
    txs: Optional[int] = None
    launched: Optional[int] = None

    for p in matching:
        _keep_first("name", p.base_name)
        _keep_first("ticker", p.base_symbol)
        _keep_first("ds_url", p.url)
        _keep_first("website_url", _first_labelled(p.websites, "website"))
        _keep_first("twitter_url", _first_labelled(p.socials, "twitter"))
        _keep_first("telegram_url", _first_labelled(p.socials, "telegram"))
        _keep_first("price", p.price_usd)
        _keep_first("daily_price_chg_pct", p.price_change_24h)

        if p.market_cap is not None and (market_cap is None or p.market_cap > market_cap):
            market_cap = p.market_cap
        if p.liquidity_usd is not None:
            liquidity = (liquidity or Decimal("0")) + p.liquidity_usd
        if p.volume_24h is not None:
            volume = (volume or Decimal("0")) + p.volume_24h
        if p.buys_24h is not None or p.sells_24h is not None:
            txs = (txs or 0) + (p.buys_24h or 0) + (p.sells_24h or 0)
        if p.pair_created_at and (launched is None or p.pair_created_at < launched):
            launched = p.pair_created_at

    if market_cap is not None:
        out["market_cap"] = round_half_up(market_cap)
    if liquidity is not None:
        out["total_dex_liq"] = round_half_up(liquidity)
    if volume is not None:
        out["daily_dex_vol"] = round_half_up(volume)
    if txs is not None:
        out["daily_dex_txs"] = txs
    if launched is not None:
        out["lp_launch_date"] = launched

    return out
