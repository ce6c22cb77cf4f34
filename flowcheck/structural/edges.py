# flowcheck/structural/edges.py

from __future__ import annotations

from typing import Any, List, Optional, Set

from flowcheck.structural.parser import EdgeDef, display, id_key, is_present
from flowcheck.structural.result import Scope, ValidationError
from flowcheck.utils.logger import get_logger

logger = get_logger("structural.edges")


def _references(node_ids: Set[Any], value: Any) -> bool:
    try:
        return id_key(value) in node_ids
    except TypeError:
        # unhashable endpoint can never name a node
        return False


def check_edges(edges: Optional[List[EdgeDef]], node_ids: Optional[Set[Any]]) -> List[ValidationError]:
    """
    Required-field and referential checks, per edge in input order.
    All checks of one edge are independent; node_ids=None skips the referential part.
    """
    if edges is None:
        return []

    errors: List[ValidationError] = []
    for edge in edges:
        i = edge.index

        def err(msg: str) -> None:
            errors.append(ValidationError(Scope.EDGE, msg, index=i))

        if not is_present(edge.source):
            err(f'Edge at index {i} is missing a "source" field')
        if not is_present(edge.target):
            err(f'Edge at index {i} is missing a "target" field')

        if edge.data is None:
            err(f'Edge at index {i} is missing a "data" object')
        else:
            if not is_present(edge.data.source_output):
                err(f'Edge at index {i} is missing a "data.sourceOutput" field')
            if not is_present(edge.data.target_input):
                err(f'Edge at index {i} is missing a "data.targetInput" field')

        if node_ids is not None:
            if is_present(edge.source) and not _references(node_ids, edge.source):
                err(f'Edge at index {i} references non-existent source node: "{display(edge.source)}"')
            if is_present(edge.target) and not _references(node_ids, edge.target):
                err(f'Edge at index {i} references non-existent target node: "{display(edge.target)}"')

    logger.debug("checked %d edge(s): %d error(s)", len(edges), len(errors))
    return errors
