# utils/graph.py
from typing import Any, Dict, List

import networkx as nx

from flowcheck.structural.parser import WorkflowDocument, display, is_present


def _graph_id(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def build_graph(document: WorkflowDocument) -> nx.MultiDiGraph:
    """
    Directed multigraph of a projected workflow document.

    Only nodes with a present string or numeric id are added; edges whose endpoints
    are not both known nodes are left out (the edge checker reports those).
    Edge attributes carry the sourceOutput/targetInput mapping.
    """
    G = nx.MultiDiGraph()
    for n in document.nodes or []:
        if not is_present(n.id) or not _graph_id(n.id):
            continue
        G.add_node(n.id, type=n.type, index=n.index)

    for e in document.edges or []:
        if not _graph_id(e.source) or not _graph_id(e.target):
            continue
        if e.source not in G or e.target not in G:
            continue
        data = e.data
        G.add_edge(
            e.source,
            e.target,
            index=e.index,
            source_output=data.source_output if data else None,
            target_input=data.target_input if data else None,
        )
    return G


def graph_summary(G: nx.MultiDiGraph) -> Dict[str, Any]:
    """Informational shape of the graph; never part of the validity decision."""
    n = G.number_of_nodes()
    simple = nx.DiGraph(G)
    orphans: List[str] = [display(v) for v in G.nodes if G.degree(v) == 0]
    sources = [display(v) for v in G.nodes if G.in_degree(v) == 0 and G.out_degree(v) > 0]
    sinks = [display(v) for v in G.nodes if G.out_degree(v) == 0 and G.in_degree(v) > 0]
    return {
        "n_nodes": n,
        "n_edges": G.number_of_edges(),
        "acyclic": nx.is_directed_acyclic_graph(simple),
        "weakly_connected": nx.is_weakly_connected(simple) if n else False,
        "orphan_nodes": orphans,
        "sources": sources,
        "sinks": sinks,
    }
