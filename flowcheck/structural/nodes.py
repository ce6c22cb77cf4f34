# flowcheck/structural/nodes.py

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple

from flowcheck.config import ValidatorOptions
from flowcheck.structural.parser import NodeDef, display, id_key, is_present
from flowcheck.structural.registry import NodeTypeSchema, SchemaRegistry
from flowcheck.structural.result import Scope, ValidationError
from flowcheck.utils.logger import get_logger

logger = get_logger("structural.nodes")


def _hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _config_errors(node: NodeDef, schema: NodeTypeSchema, options: ValidatorOptions) -> List[ValidationError]:
    errors: List[ValidationError] = []
    prefix = f'Node "{node.label}" ({schema.name})'
    node_id = node.label if is_present(node.id) else None

    for key in schema.missing_required(node.config):
        errors.append(ValidationError(
            Scope.NODE,
            f"{prefix} is missing required config property: {key}",
            index=node.index,
            node_id=node_id,
        ))

    if options.check_config_types:
        for v in schema.config_violations(node.config):
            path = ".".join(str(p) for p in v.absolute_path) or "<config>"
            errors.append(ValidationError(
                Scope.NODE,
                f'{prefix} has invalid config property "{path}": {v.message}',
                index=node.index,
                node_id=node_id,
            ))
    return errors


def check_nodes(
    nodes: Optional[List[NodeDef]],
    registry: SchemaRegistry,
    options: ValidatorOptions,
) -> Tuple[List[ValidationError], Optional[Set[Any]]]:
    """
    Check every node in input order.

    Returns (errors, node_ids). node_ids holds id_key() values and is None when the document
    had no usable `nodes` array, which disables the referential edge checks.
    """
    if nodes is None:
        return [], None

    errors: List[ValidationError] = []
    node_ids: Set[Any] = set()
    first_seen: Dict[Any, int] = {}

    for node in nodes:
        i = node.index
        node_id = node.label if is_present(node.id) else None

        if not is_present(node.id):
            errors.append(ValidationError(Scope.NODE, f'Node at index {i} is missing an "id" field', index=i))
        if not is_present(node.type):
            errors.append(ValidationError(Scope.NODE, f'Node at index {i} is missing a "type" field', index=i))
        if node.config is None:
            errors.append(ValidationError(Scope.NODE, f'Node at index {i} is missing a "config" object', index=i))

        if is_present(node.type):
            schema = registry.lookup(node.type)
            if schema is None:
                errors.append(ValidationError(
                    Scope.NODE, f"Unknown node type: {display(node.type)}", index=i, node_id=node_id,
                ))
            elif node.config is not None:
                errors.extend(_config_errors(node, schema, options))

        if _hashable(node.id):
            key = id_key(node.id)
            if (
                options.check_duplicate_ids
                and is_present(node.id)
                and key in first_seen
            ):
                errors.append(ValidationError(
                    Scope.NODE,
                    f'Duplicate node id "{node.label}" at index {i} '
                    f"(first defined at index {first_seen[key]})",
                    index=i,
                    node_id=node_id,
                ))
            first_seen.setdefault(key, i)
            node_ids.add(key)

    logger.debug("checked %d node(s): %d error(s)", len(nodes), len(errors))
    return errors, node_ids
