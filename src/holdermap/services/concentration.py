from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from holdermap.config import settings
from holdermap.core.dto import HolderNode
from holdermap.core.models import ConcentrationStats
from holdermap.core.parsing import round_half_up


def estimate_circulating_supply(nodes: List[HolderNode]) -> Optional[int]:
    """
    First node carrying both an amount and a share gives the supply:
    amount / (percentage / 100). Later nodes never override it.
    """
    for node in nodes:
        if node.amount and node.percentage:
            return round_half_up(Decimal(100) * node.amount / node.percentage)
    return None


def compute_concentration(
    nodes: List[HolderNode],
    group_sizes: Sequence[int] = settings.HOLDER_GROUP_SIZES,
) -> ConcentrationStats:
    """
    Supply share held by the top-N rows, as ranked by the provider.

    wallet_pct counts every row; holder_pct skips contract rows but keeps
    them in the rank window (top 10 means the first 10 rows, not the first
    10 wallets).
    """
    sizes = tuple(int(g) for g in group_sizes)
    wallet_pct: Dict[int, Decimal] = {g: Decimal("0") for g in sizes}
    holder_pct: Dict[int, Decimal] = {g: Decimal("0") for g in sizes}

    for i, node in enumerate(nodes):
        pct = node.percentage or Decimal("0")
        for g in sizes:
            if i >= g:
                continue
            wallet_pct[g] += pct
            if not node.is_contract:
                holder_pct[g] += pct

    return ConcentrationStats(
        group_sizes=sizes,
        wallet_pct=wallet_pct,
        holder_pct=holder_pct,
        circ_supply=estimate_circulating_supply(nodes),
    )
