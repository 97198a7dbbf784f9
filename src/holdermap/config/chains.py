from __future__ import annotations

from typing import Dict, Optional

# Every alias a user or provider may hand us -> canonical (Bubblemaps) short code.
CHAIN_ALIASES: Dict[str, str] = {
    "eth": "eth",
    "ethereum": "eth",
    "bsc": "bsc",
    "ftm": "ftm",
    "fantom": "ftm",
    "avax": "avax",
    "avalanche": "avax",
    "cro": "cro",
    "cronos": "cro",
    "arb": "arbi",
    "arbi": "arbi",
    "arbitrum": "arbi",
    "pol": "poly",
    "poly": "poly",
    "polygon": "poly",
    "base": "base",
    "sol": "sol",
    "solana": "sol",
    "sonic": "sonic",
}

DEXSCREENER_CHAIN_IDS: Dict[str, str] = {
    "eth": "ethereum",
    "bsc": "bsc",
    "ftm": "fantom",
    "avax": "avalanche",
    "cro": "cronos",
    "arbi": "arbitrum",
    "poly": "polygon",
    "base": "base",
    "sol": "solana",
    "sonic": "sonic",
}

COINGECKO_CHAIN_IDS: Dict[str, str] = {
    "eth": "ethereum",
    "bsc": "binance-smart-chain",
    "ftm": "fantom",
    "avax": "avalanche",
    "cro": "cronos",
    "arbi": "arbitrum-one",
    "poly": "polygon-pos",
    "base": "base",
    "sol": "solana",
    "sonic": "sonic",
}


def resolve_chain(alias: Optional[str]) -> Optional[str]:
    if not alias:
        return None
    return CHAIN_ALIASES.get(alias.strip().lower())


def dexscreener_chain_id(chain_id: str) -> Optional[str]:
    canonical = resolve_chain(chain_id)
    return DEXSCREENER_CHAIN_IDS.get(canonical) if canonical else None


def coingecko_chain_id(chain_id: str) -> Optional[str]:
    canonical = resolve_chain(chain_id)
    return COINGECKO_CHAIN_IDS.get(canonical) if canonical else None
