# flowcheck/structural/checker.py

from typing import Any, List, Optional, Union

from flowcheck.config import ValidatorOptions
from flowcheck.structural.contracts import check_input_contracts
from flowcheck.structural.edges import check_edges
from flowcheck.structural.nodes import check_nodes
from flowcheck.structural.parser import WorkflowDocument, parse_document, project_document
from flowcheck.structural.registry import SchemaRegistry, default_registry
from flowcheck.structural.result import Scope, ValidationError, ValidationResult
from flowcheck.utils.logger import get_logger

logger = get_logger("structural.checker")


def check_structure(document: WorkflowDocument, options: ValidatorOptions) -> List[ValidationError]:
    """Document-level checks; every rule is evaluated independently."""
    errors: List[ValidationError] = []

    if not isinstance(document.name, str) or not document.name:
        errors.append(ValidationError(Scope.DOCUMENT, 'Missing or invalid "name" field'))
    if document.nodes is None:
        errors.append(ValidationError(Scope.DOCUMENT, 'Missing or invalid "nodes" array'))
    if document.edges is None:
        errors.append(ValidationError(Scope.DOCUMENT, 'Missing or invalid "edges" array'))

    if options.check_config_types:
        if document.description is not None and not isinstance(document.description, str):
            errors.append(ValidationError(Scope.DOCUMENT, 'Invalid "description" field: expected a string'))
        if document.config is not None and not isinstance(document.config, dict):
            errors.append(ValidationError(Scope.DOCUMENT, 'Invalid "config" field: expected an object'))

    return errors


def validate_document(
    value: Any,
    registry: Optional[SchemaRegistry] = None,
    options: Optional[ValidatorOptions] = None,
) -> ValidationResult:
    """
    Run every post-parse stage on an already-decoded JSON value.

    Stages always run in order (structure, nodes, edges, input contracts) so a
    single call reports every problem; earlier errors never stop later stages.
    """
    registry = registry if registry is not None else default_registry()
    options = options if options is not None else ValidatorOptions()

    errors: List[ValidationError] = []
    try:
        document = project_document(value)
        errors.extend(check_structure(document, options))

        node_errors, node_ids = check_nodes(document.nodes, registry, options)
        errors.extend(node_errors)

        errors.extend(check_edges(document.edges, node_ids))
        errors.extend(check_input_contracts(document.nodes, document.edges))
    except Exception as exc:
        logger.exception("validation aborted by an unexpected error")
        errors.append(ValidationError(Scope.INTERNAL, f"Internal validation error: {exc}"))

    result = ValidationResult.from_errors(errors)
    logger.debug("validation finished: valid=%s errors=%d", result.valid, len(result.errors))
    return result


def validate(
    text: Union[str, bytes, bytearray],
    registry: Optional[SchemaRegistry] = None,
    options: Optional[ValidatorOptions] = None,
) -> ValidationResult:
    """
    Validate raw workflow text.

    Malformed JSON yields exactly one error ("Invalid JSON format: ...") and
    nothing else runs. Never raises; every problem is an entry of `errors`.
    """
    outcome = parse_document(text)
    if not outcome.ok:
        return ValidationResult.from_errors([ValidationError(Scope.PARSE, outcome.error)])
    return validate_document(outcome.value, registry=registry, options=options)


# Name used by the agent-creation front end
validate_workflow_json = validate
