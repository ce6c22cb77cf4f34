# flowcheck/structural/registry.py
"""Catalog of node types and the JSON Schema of their `config` object.

The registry is built once and is read-only afterwards; validators receive it
as an argument instead of reaching for module state.
"""
from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError as SchemaViolation

from .schema import NODE_TYPE_SCHEMAS
from flowcheck.utils.logger import get_logger

logger = get_logger("structural.registry")


def _path_key(path) -> Tuple[Tuple[int, Any], ...]:
    return tuple((0, p) if isinstance(p, int) else (1, str(p)) for p in path)


@dataclass(frozen=True)
class NodeTypeSchema:
    """Configuration contract of one node type."""

    name: str
    required: Tuple[str, ...]
    properties: Mapping[str, Any]
    validator: Draft7Validator = field(repr=False, compare=False)

    @classmethod
    def from_json_schema(cls, name: str, schema: Mapping[str, Any]) -> "NodeTypeSchema":
        """
        Build from a JSON Schema fragment describing `config`.

        Raises jsonschema.exceptions.SchemaError if the fragment itself is invalid.
        """
        schema = copy.deepcopy(dict(schema))
        Draft7Validator.check_schema(schema)

        required = tuple(schema.get("required") or ())
        # required keys are reported by the node checker with its own wording
        body = {k: v for k, v in schema.items() if k != "required"}
        body.setdefault("type", "object")

        return cls(
            name=name,
            required=required,
            properties=MappingProxyType(dict(schema.get("properties") or {})),
            validator=Draft7Validator(body),
        )

    def missing_required(self, config: Mapping[str, Any]) -> list[str]:
        return [key for key in self.required if key not in config]

    def config_violations(self, config: Mapping[str, Any]) -> list[SchemaViolation]:
        """All value-kind violations in `config`, ordered by their path."""
        errors = self.validator.iter_errors(config)
        # array indices sort numerically, so tools.2 comes before tools.10
        return sorted(errors, key=lambda e: (_path_key(e.absolute_path), e.message))

    def to_json_schema(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": "object", "properties": copy.deepcopy(dict(self.properties))}
        if self.required:
            out["required"] = list(self.required)
        return out


class SchemaRegistry(Mapping[str, NodeTypeSchema]):
    """Immutable mapping: node type name -> NodeTypeSchema."""

    def __init__(self, schemas: Mapping[str, NodeTypeSchema]):
        self._schemas = MappingProxyType(dict(schemas))

    def __getitem__(self, name: str) -> NodeTypeSchema:
        return self._schemas[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        return f"SchemaRegistry({sorted(self._schemas)})"

    def lookup(self, node_type: Any) -> Optional[NodeTypeSchema]:
        """Return the schema for `node_type`, or None for unknown / non-string types."""
        if not isinstance(node_type, str):
            return None
        return self._schemas.get(node_type)

    @classmethod
    def from_definitions(cls, definitions: Mapping[str, Mapping[str, Any]]) -> "SchemaRegistry":
        return cls({name: NodeTypeSchema.from_json_schema(name, s) for name, s in definitions.items()})

    def merged(self, definitions: Mapping[str, Mapping[str, Any]]) -> "SchemaRegistry":
        """New registry with `definitions` added; same-named types are replaced."""
        extra = SchemaRegistry.from_definitions(definitions)
        combined = dict(self._schemas)
        combined.update(extra._schemas)
        return SchemaRegistry(combined)

    @classmethod
    def load_json(cls, path: Union[str, Path], base: Optional["SchemaRegistry"] = None) -> "SchemaRegistry":
        """
        Load node type definitions from a JSON file of the form
        {"<NodeType>": {<config JSON Schema>}, ...} and merge them over `base`
        (the built-in catalog when omitted).
        """
        with Path(path).open("r", encoding="utf-8") as f:
            definitions = json.load(f)
        if not isinstance(definitions, dict):
            raise ValueError(f"{path}: expected a JSON object mapping node types to schemas")
        for name, schema in definitions.items():
            if not isinstance(schema, dict):
                raise ValueError(f"{path}: schema for node type '{name}' must be a JSON object")

        registry = (base if base is not None else default_registry()).merged(definitions)
        logger.info("loaded %d node type(s) from %s", len(definitions), path)
        return registry

    def describe(self) -> Dict[str, Dict[str, Any]]:
        return {name: s.to_json_schema() for name, s in self._schemas.items()}


@lru_cache(maxsize=None)
def default_registry() -> SchemaRegistry:
    """Built-in node type catalog, constructed on first use."""
    return SchemaRegistry.from_definitions(NODE_TYPE_SCHEMAS)
