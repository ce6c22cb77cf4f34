import json

import pytest

from flowcheck.config import BASELINE, ValidatorOptions
from flowcheck.structural import checker
from flowcheck.structural.checker import validate, validate_document, validate_workflow_json
from flowcheck.structural.result import Scope


def _text(doc) -> str:
    return json.dumps(doc)


SCENARIOS = [
    (
        '{"name":"A","nodes":[{"id":"n1","type":"InputNode","config":{"input_fields":["x"]}}],"edges":[]}',
        True,
        None,
    ),
    ('{"nodes":[],"edges":[]}', False, 'Missing or invalid "name" field'),
    (
        '{"name":"A","nodes":[{"id":"n1","type":"LLMNode","config":{}}],'
        '"edges":[{"source":"n1","target":"n2","data":{"sourceOutput":"o","targetInput":"i"}}]}',
        False,
        'Edge at index 0 references non-existent target node: "n2"',
    ),
    (
        '{"name":"A","nodes":[{"id":"n1","type":"InputNode","config":{"input_fields":["x"]}}],'
        '"edges":[{"source":"n1","target":"n1","data":{"sourceOutput":"y","targetInput":"z"}}]}',
        False,
        'Edge from InputNode references field "y" which is not defined in input_fields',
    ),
]


@pytest.mark.parametrize("text,valid,expected", SCENARIOS)
def test_scenarios(text, valid, expected):
    result = validate(text)
    assert result.valid is valid, result.messages
    if expected is None:
        assert result.errors == []
    else:
        assert expected in result.messages


def test_malformed_json_short_circuits():
    result = validate("{not json")
    assert not result.valid
    assert len(result.errors) == 1
    assert result.errors[0].scope == Scope.PARSE
    assert result.messages[0].startswith("Invalid JSON format:")


def test_determinism():
    text = _text({"nodes": [{"type": "Nope"}], "edges": [{"source": "x"}]})
    first = validate(text)
    for _ in range(3):
        again = validate(text)
        assert again == first


def test_cumulative_errors():
    result = validate(_text({"nodes": [{"type": "LLMNode", "config": {}}], "edges": []}))
    assert 'Missing or invalid "name" field' in result.messages
    assert 'Node at index 0 is missing an "id" field' in result.messages


def test_unknown_type_does_not_stop_later_stages():
    result = validate(_text({
        "name": "A",
        "nodes": [
            {"id": "in", "type": "InputNode", "config": {"input_fields": ["q"]}},
            {"id": "x", "type": "QuantumNode", "config": {}},
        ],
        "edges": [
            {"source": "in", "target": "x", "data": {"sourceOutput": "nope", "targetInput": "i"}},
            {"source": "x", "target": "gone", "data": {"sourceOutput": "o", "targetInput": "i"}},
        ],
    }))
    assert result.messages == [
        "Unknown node type: QuantumNode",
        'Edge at index 1 references non-existent target node: "gone"',
        'Edge from InputNode references field "nope" which is not defined in input_fields',
    ]


def test_contract_check_needs_input_node():
    result = validate(_text({
        "name": "A",
        "nodes": [{"id": "a", "type": "LLMNode", "config": {}}],
        "edges": [{"source": "a", "target": "a", "data": {"sourceOutput": "zzz", "targetInput": "i"}}],
    }))
    assert result.valid
    assert not any("input_fields" in m for m in result.messages)


def test_structural_errors_come_first():
    result = validate(_text({"nodes": [{}], "edges": "nope"}))
    assert result.messages[:2] == ['Missing or invalid "name" field', 'Missing or invalid "edges" array']
    assert [e.scope for e in result.errors][2:] == [Scope.NODE] * 3


@pytest.mark.parametrize("text", ["[]", "42", '"workflow"', "null"])
def test_non_object_document(text):
    result = validate(text)
    assert result.messages == [
        'Missing or invalid "name" field',
        'Missing or invalid "nodes" array',
        'Missing or invalid "edges" array',
    ]


def test_name_must_be_non_empty_string():
    for name in ("", 5, None, ["A"]):
        result = validate(_text({"name": name, "nodes": [], "edges": []}))
        assert result.messages == ['Missing or invalid "name" field'], name


def test_optional_document_fields_shape():
    doc = {"name": "A", "description": 3, "nodes": [], "edges": [], "config": ["x"]}
    result = validate(_text(doc))
    assert result.messages == [
        'Invalid "description" field: expected a string',
        'Invalid "config" field: expected an object',
    ]
    assert validate(_text(doc), options=BASELINE).valid


def test_validate_document_on_parsed_value():
    doc = {"name": "A", "nodes": [], "edges": []}
    assert validate_document(doc).valid
    assert doc == {"name": "A", "nodes": [], "edges": []}


def test_options_are_passed_through():
    text = _text({
        "name": "A",
        "nodes": [{"id": "a", "type": "InputNode", "config": {}}, {"id": "a", "type": "InputNode", "config": {}}],
        "edges": [],
    })
    assert validate(text).valid
    result = validate(text, options=ValidatorOptions(check_duplicate_ids=True))
    assert result.messages == ['Duplicate node id "a" at index 1 (first defined at index 0)']


def test_unexpected_failure_is_reported_not_raised(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("registry exploded")

    monkeypatch.setattr(checker, "check_nodes", boom)
    result = validate('{"name": "A", "nodes": [], "edges": []}')
    assert not result.valid
    assert result.errors[-1].scope == Scope.INTERNAL
    assert result.messages[-1] == "Internal validation error: registry exploded"


def test_front_end_alias():
    assert validate_workflow_json is validate


def test_to_dict():
    result = validate('{"nodes":[],"edges":[]}')
    assert result.to_dict() == {"valid": False, "errors": ['Missing or invalid "name" field']}
