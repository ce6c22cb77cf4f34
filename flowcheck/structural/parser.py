# flowcheck/structural/parser.py

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Union


class ParseOutcome(NamedTuple):
    value: Any
    error: Optional[str]

    @property
    def ok(self) -> bool:
        return self.error is None


def _reject_constant(name: str) -> Any:
    # json accepts NaN / Infinity, JSON itself does not
    raise ValueError(f"Unexpected token {name} is not valid JSON")


def parse_document(text: Union[str, bytes, bytearray]) -> ParseOutcome:
    """
    Decode raw workflow text.

    Returns (value, None) on success, or (None, "Invalid JSON format: <reason>").
    Never raises.
    """
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError) as exc:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors
        reason = str(exc) or exc.__class__.__name__
        return ParseOutcome(None, f"Invalid JSON format: {reason}")
    return ParseOutcome(value, None)


# ---------------------------------------------------------------------------
# Projection into typed records
# ---------------------------------------------------------------------------

def is_present(value: Any) -> bool:
    """
    JSON truthiness: null, false, 0 and "" count as missing;
    empty arrays and objects count as present.
    """
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def display(value: Any) -> str:
    """Render a JSON value for an error message (strings as-is)."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def id_key(value: Any) -> Any:
    """
    Comparison key for node ids and edge endpoints.
    JSON true/false stay distinct from 1/0 (Python treats True == 1).
    """
    if isinstance(value, bool):
        return (bool, value)
    return value


@dataclass
class EdgeData:
    source_output: Any = None
    target_input: Any = None


@dataclass
class NodeDef:
    index: int
    id: Any = None
    type: Any = None
    config: Optional[Dict[str, Any]] = None
    raw: Any = None

    @property
    def label(self) -> str:
        # an absent id renders as "undefined", an explicit null as "null"
        if self.id is None and not (isinstance(self.raw, dict) and "id" in self.raw):
            return "undefined"
        return display(self.id)


@dataclass
class EdgeDef:
    index: int
    source: Any = None
    target: Any = None
    data: Optional[EdgeData] = None
    raw: Any = None


@dataclass
class WorkflowDocument:
    name: Any = None
    description: Any = None
    nodes: Optional[List[NodeDef]] = None
    edges: Optional[List[EdgeDef]] = None
    config: Any = None
    raw: Any = None


def _project_node(index: int, raw: Any) -> NodeDef:
    if not isinstance(raw, dict):
        return NodeDef(index=index, raw=raw)
    config = raw.get("config")
    return NodeDef(
        index=index,
        id=raw.get("id"),
        type=raw.get("type"),
        config=config if isinstance(config, dict) else None,
        raw=raw,
    )


def _project_edge(index: int, raw: Any) -> EdgeDef:
    if not isinstance(raw, dict):
        return EdgeDef(index=index, raw=raw)
    data = raw.get("data")
    return EdgeDef(
        index=index,
        source=raw.get("source"),
        target=raw.get("target"),
        data=EdgeData(data.get("sourceOutput"), data.get("targetInput")) if isinstance(data, dict) else None,
        raw=raw,
    )


def project_document(value: Any) -> WorkflowDocument:
    """
    Project a parsed JSON value onto WorkflowDocument without failing.
    Anything of the wrong shape is left as None for the checkers to report.
    The parsed value is referenced, never copied or modified.
    """
    if not isinstance(value, dict):
        return WorkflowDocument(raw=value)

    nodes = value.get("nodes")
    edges = value.get("edges")
    return WorkflowDocument(
        name=value.get("name"),
        description=value.get("description"),
        nodes=[_project_node(i, n) for i, n in enumerate(nodes)] if isinstance(nodes, list) else None,
        edges=[_project_edge(i, e) for i, e in enumerate(edges)] if isinstance(edges, list) else None,
        config=value.get("config"),
        raw=value,
    )
