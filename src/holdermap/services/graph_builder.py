from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from holdermap.core.dto import HolderLink, HolderNode

AddressGraph = Dict[str, Set[str]]


def add_edge(graph: AddressGraph, source: str, target: str) -> None:
    graph.setdefault(source, set()).add(target)
    graph.setdefault(target, set()).add(source)


def _wallet_at(nodes: List[HolderNode], idx: int) -> Optional[HolderNode]:
    # negative indices must not wrap around
    if idx < 0 or idx >= len(nodes):
        return None
    node = nodes[idx]
    if node.is_contract or not node.address:
        return None
    return node


def build_address_graph(
    nodes: List[HolderNode],
    links: Iterable[HolderLink],
    token_links: Iterable[Iterable[HolderLink]] = (),
) -> AddressGraph:
    """
    Undirected adjacency over non-contract holders.

    Links with a missing endpoint or a contract endpoint are skipped, so a
    contract address never shows up in the graph.
    """
    graph: AddressGraph = {}

    def _apply(group: Iterable[HolderLink]) -> None:
        for link in group:
            src = _wallet_at(nodes, link.source)
            dst = _wallet_at(nodes, link.target)
            if src is None or dst is None or src.address == dst.address:
                continue
            add_edge(graph, src.address, dst.address)

    _apply(links)
    for group in token_links:
        _apply(group)

    return graph
