# flowcheck/structural/contracts.py

from __future__ import annotations

from typing import List, Optional, Set

from flowcheck.structural.parser import EdgeDef, NodeDef, display, id_key, is_present
from flowcheck.structural.result import Scope, ValidationError
from flowcheck.structural.schema import INPUT_NODE_TYPE
from flowcheck.utils.logger import get_logger

logger = get_logger("structural.contracts")


def declared_input_fields(node: NodeDef) -> Optional[Set[str]]:
    """`config.input_fields` as a set, or None when absent or not a list of strings."""
    if node.config is None:
        return None
    fields = node.config.get("input_fields")
    if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
        return None
    return set(fields)


def check_input_contracts(
    nodes: Optional[List[NodeDef]],
    edges: Optional[List[EdgeDef]],
) -> List[ValidationError]:
    """
    Edges leaving an InputNode may only carry fields the node declares in
    `input_fields`. Skipped silently when no InputNode declares them.
    """
    if not nodes or not edges:
        return []

    errors: List[ValidationError] = []
    for node in nodes:
        if node.type != INPUT_NODE_TYPE or not is_present(node.id):
            continue
        declared = declared_input_fields(node)
        if declared is None:
            logger.debug("InputNode %r has no usable input_fields; contract check skipped", node.id)
            continue

        key = id_key(node.id)
        for edge in edges:
            if id_key(edge.source) != key or edge.data is None:
                continue
            out = edge.data.source_output
            if not is_present(out):
                continue
            if not isinstance(out, str) or out not in declared:
                errors.append(ValidationError(
                    Scope.CONTRACT,
                    f'Edge from InputNode references field "{display(out)}" which is not defined in input_fields',
                    index=edge.index,
                    node_id=node.label,
                ))
    return errors
