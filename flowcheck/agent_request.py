# flowcheck/agent_request.py
"""
Glue between validation and agent creation.

A workflow file is validated first; only a valid document is turned into the
create-agent request, which carries the document's nodes, edges and config
verbatim. Submitting the request is the caller's business.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from flowcheck.config import ValidatorOptions
from flowcheck.structural.checker import validate_document
from flowcheck.structural.parser import parse_document
from flowcheck.structural.registry import SchemaRegistry
from flowcheck.structural.result import Scope, ValidationError, ValidationResult


@dataclass
class DebugResult:
    parsed: Any
    validation_result: ValidationResult


def debug_workflow_json(
    text: Union[str, bytes, bytearray],
    registry: Optional[SchemaRegistry] = None,
    options: Optional[ValidatorOptions] = None,
) -> DebugResult:
    """Parse once and validate, keeping the parsed value for request building."""
    outcome = parse_document(text)
    if not outcome.ok:
        return DebugResult(
            parsed=None,
            validation_result=ValidationResult.from_errors([ValidationError(Scope.PARSE, outcome.error)]),
        )
    return DebugResult(
        parsed=outcome.value,
        validation_result=validate_document(outcome.value, registry=registry, options=options),
    )


def format_failure(result: ValidationResult) -> str:
    return f"JSON validation failed: {', '.join(result.messages)}"


def build_create_request(
    parsed: Dict[str, Any],
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create-agent request from a validated document.

    `name` / `description` override the document's values when given (non-empty).
    Missing description falls back to "", missing config to {}.
    """
    return {
        "name": name or parsed.get("name"),
        "description": description or parsed.get("description") or "",
        "nodes": parsed.get("nodes") or [],
        "edges": parsed.get("edges") or [],
        "config": parsed.get("config") or {},
    }


MIN_NAME_LENGTH = 3


class AgentNameRejected(ValueError):
    pass


def check_agent_name(name: Any) -> None:
    if not isinstance(name, str) or len(name) < MIN_NAME_LENGTH:
        raise AgentNameRejected(f"Name must be at least {MIN_NAME_LENGTH} characters.")


class WorkflowRejected(ValueError):
    """Raised by prepare_create_request when the workflow has validation errors."""

    def __init__(self, result: ValidationResult):
        super().__init__(format_failure(result))
        self.result = result


def prepare_create_request(
    text: Union[str, bytes, bytearray],
    name: Optional[str] = None,
    description: Optional[str] = None,
    registry: Optional[SchemaRegistry] = None,
    options: Optional[ValidatorOptions] = None,
) -> Dict[str, Any]:
    """
    Validate `text` and build the request.

    Raises WorkflowRejected on any validation error, AgentNameRejected when the
    resulting agent name is shorter than three characters.
    """
    debug = debug_workflow_json(text, registry=registry, options=options)
    if not debug.validation_result.valid:
        raise WorkflowRejected(debug.validation_result)
    payload = build_create_request(debug.parsed, name=name, description=description)
    check_agent_name(payload["name"])
    return payload
