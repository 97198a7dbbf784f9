from __future__ import annotations

import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from holdermap.adapters.holders.bubblemaps_adapter import map_page_url
from holdermap.core.models import FusedTokenRecord

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def format_big_number(num) -> str:
    if not num:
        return ""
    n = Decimal(num)
    for threshold, unit in ((Decimal("1e12"), "T"), (Decimal("1e9"), "B"), (Decimal("1e6"), "M"), (Decimal("1e3"), "K")):
        if n >= threshold:
            return f"${n / threshold:.1f}{unit}"
    return f"${n}"


def format_pct(num) -> str:
    if num is None:
        return ""
    return f"{Decimal(num):.1f}%"


def format_signed(text: str) -> str:
    if not text:
        return ""
    if text.startswith("-"):
        return f"({text})"
    return f"(+{text})"


def time_ago(past_ts: Optional[int], now_ts: Optional[int] = None) -> str:
    if not past_ts:
        return ""
    now = int(now_ts if now_ts is not None else time.time())
    delta = max(0, now - int(past_ts))

    years = delta // (365 * _DAY)
    months = (delta // (30 * _DAY)) % 12
    days = (delta // _DAY) % 30
    hours = (delta // _HOUR) % 24
    minutes = (delta // _MINUTE) % 60

    if years > 0:
        return f"{years}y {months}mo ago"
    if months > 0:
        return f"{months}mo {days}d ago"
    if days > 0:
        return f"{days}d {hours}h ago"
    if hours > 0:
        return f"{hours}h {minutes}m ago"
    return f"{minutes}m ago"


def _tree(lines: List[str]) -> List[str]:
    # "├" for every row but the last
    return [("  └ " if i == len(lines) - 1 else "  ├ ") + line for i, line in enumerate(lines)]


def render_report(r: FusedTokenRecord, now_ts: Optional[int] = None) -> str:
    """
    Plain-text token report. Any field of the record may be missing.
    """
    out: List[str] = []

    title = f"{r.name} ({r.ticker})" if r.name and r.ticker else r.token_address
    out.append(title)
    out.append(f"  {r.token_address}")
    out.append(f"  #{r.chain_id} | {time_ago(r.lp_launch_date, now_ts)}".rstrip(" |"))

    links = [
        f"Website: {r.website_url}" if r.website_url else "",
        f"X: {r.twitter_url}" if r.twitter_url else "",
        f"TG: {r.telegram_url}" if r.telegram_url else "",
    ]
    links = [x for x in links if x]
    if links:
        out.append("")
        out.extend(links)

    if r.group_sizes and r.wallet_pct and r.holder_pct:
        rows: List[str] = []
        for g in r.group_sizes:
            wallet = r.wallet_pct.get(g)
            holder = r.holder_pct.get(g)
            rows.append(f"Top {g}: {format_pct(wallet)}")
            if holder != wallet:
                rows.append(f"Top {g} (exc contracts): {format_pct(holder)}")
        out.append("")
        out.append("Top Wallets Supply Pct")
        out.extend(_tree(rows))

    meta_rows: List[str] = []
    if r.decentralisation_score is not None or r.cex_supply_pct is not None or r.contracts_supply_pct is not None:
        meta_rows = [
            f"Decentralisation Score: {r.decentralisation_score if r.decentralisation_score is not None else ''}",
            f"CEX Supply: {format_pct(r.cex_supply_pct)}",
            f"Contracts Supply: {format_pct(r.contracts_supply_pct)}",
        ]
        out.append("")
        out.append("Metadata")
        out.extend(_tree(meta_rows))

    if r.top_clusters and r.circ_supply:
        rows = [
            f"Cluster {i}: {format_pct(Decimal(100) * c.total_amount / Decimal(r.circ_supply))}"
            for i, c in enumerate(r.top_clusters, start=1)
        ]
        out.append("")
        out.append("Top Clusters Supply Pct")
        out.extend(_tree(rows))

    if r.bm_map_data_timestamp and (meta_rows or (r.top_clusters and r.circ_supply)):
        out.append(f"  Last Update: {time_ago(r.bm_map_data_timestamp, now_ts)}")

    if r.price is not None or r.market_cap is not None:
        price = f"${r.price} {format_signed(format_pct(r.daily_price_chg_pct))}".rstrip() if r.price is not None else ""
        launched = (
            datetime.fromtimestamp(r.lp_launch_date, tz=timezone.utc).strftime("%m/%d/%Y")
            if r.lp_launch_date
            else ""
        )
        rows = [
            f"Price: {price}",
            f"MC: {format_big_number(r.market_cap)}",
            f"24h Dex Vol: {format_big_number(r.daily_dex_vol)}",
            f"Dex Liq: {format_big_number(r.total_dex_liq)}",
            f"24h Dex Tx Count: {f'{r.daily_dex_txs:,}' if r.daily_dex_txs else ''}",
            f"LP Add Date: {launched}",
        ]
        out.append("")
        out.append("Token Stats")
        out.extend(_tree(rows))

    out.append("")
    out.append(f"Bubblemaps: {map_page_url(r.chain_id, r.token_address)}")
    if r.ds_url:
        out.append(f"DexScreener: {r.ds_url}")
    if r.cg_url:
        out.append(f"CoinGecko: {r.cg_url}")
    if r.failed_sources:
        out.append(f"Unavailable: {', '.join(r.failed_sources)}")

    return "\n".join(out) + "\n"
