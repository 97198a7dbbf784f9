from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Set

from holdermap.config import settings
from holdermap.core.dto import HolderMapData, HolderNode
from holdermap.core.models import Cluster
from holdermap.services.graph_builder import AddressGraph, build_address_graph


def explore_cluster(start: str, graph: AddressGraph, visited: Set[str]) -> Set[str]:
    """
    Iterative depth-first walk from `start`; every reached address is added
    to `visited` and to the returned cluster.
    """
    stack = [start]
    cluster: Set[str] = set()

    while stack:
        address = stack.pop()
        if address in visited:
            continue
        visited.add(address)
        cluster.add(address)
        for neighbor in graph.get(address, ()):
            if neighbor not in visited:
                stack.append(neighbor)

    return cluster


def find_clusters(graph: AddressGraph, nodes: List[HolderNode]) -> List[Set[str]]:
    visited: Set[str] = set()
    clusters: List[Set[str]] = []

    for node in nodes:
        if node.is_contract or not node.address or node.address in visited:
            continue
        cluster = explore_cluster(node.address, graph, visited)
        # isolated wallets are not clusters
        if len(cluster) > 1:
            clusters.append(cluster)

    return clusters


def _amounts_by_address(nodes: List[HolderNode]) -> Dict[str, Decimal]:
    amounts: Dict[str, Decimal] = {}
    for node in nodes:
        if node.address and node.address not in amounts:
            amounts[node.address] = node.amount or Decimal("0")
    return amounts


def rank_clusters(
    clusters: List[Set[str]],
    nodes: List[HolderNode],
    limit: int = settings.TOP_CLUSTER_COUNT,
) -> List[Cluster]:
    amounts = _amounts_by_address(nodes)

    ranked: List[Cluster] = []
    for members in clusters:
        total = sum((amounts.get(a, Decimal("0")) for a in members), Decimal("0"))
        # no supply behind it, nothing to report
        if total <= 0:
            continue
        ranked.append(Cluster(addresses=frozenset(members), total_amount=total))

    # sorted() is stable: equal totals keep discovery order
    ranked = sorted(ranked, key=lambda c: c.total_amount, reverse=True)
    return ranked[:limit]


def detect_top_clusters(map_data: HolderMapData, limit: int = settings.TOP_CLUSTER_COUNT) -> List[Cluster]:
    graph = build_address_graph(map_data.nodes, map_data.links, map_data.token_links)
    return rank_clusters(find_clusters(graph, map_data.nodes), map_data.nodes, limit=limit)
