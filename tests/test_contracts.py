from flowcheck.structural.contracts import check_input_contracts, declared_input_fields
from flowcheck.structural.parser import project_document


def _doc(nodes, edges):
    return project_document({"name": "A", "nodes": nodes, "edges": edges})


def _edge(source, out, target="sink"):
    return {"source": source, "target": target, "data": {"sourceOutput": out, "targetInput": "in"}}


INPUT = {"id": "in", "type": "InputNode", "config": {"input_fields": ["question", "file"]}}


def test_declared_fields_accepted():
    doc = _doc([INPUT], [_edge("in", "question"), _edge("in", "file")])
    assert check_input_contracts(doc.nodes, doc.edges) == []


def test_undeclared_field_reported_per_edge():
    doc = _doc([INPUT], [_edge("in", "question"), _edge("in", "image"), _edge("in", "audio")])
    errors = check_input_contracts(doc.nodes, doc.edges)
    assert [e.message for e in errors] == [
        'Edge from InputNode references field "image" which is not defined in input_fields',
        'Edge from InputNode references field "audio" which is not defined in input_fields',
    ]
    assert [e.index for e in errors] == [1, 2]
    assert errors[0].node_id == "in"


def test_edges_from_other_nodes_ignored():
    doc = _doc([INPUT, {"id": "llm", "type": "LLMNode", "config": {}}], [_edge("llm", "image")])
    assert check_input_contracts(doc.nodes, doc.edges) == []


def test_missing_source_output_is_not_a_contract_error():
    doc = _doc([INPUT], [{"source": "in", "target": "x", "data": {"targetInput": "in"}}, {"source": "in", "target": "x"}])
    assert check_input_contracts(doc.nodes, doc.edges) == []


def test_skipped_without_input_node():
    doc = _doc([{"id": "llm", "type": "LLMNode", "config": {}}], [_edge("llm", "whatever")])
    assert check_input_contracts(doc.nodes, doc.edges) == []


def test_skipped_when_input_fields_malformed():
    for config in ({}, {"input_fields": "question"}, {"input_fields": ["question", 3]}):
        doc = _doc([{"id": "in", "type": "InputNode", "config": config}], [_edge("in", "anything")])
        assert check_input_contracts(doc.nodes, doc.edges) == [], config


def test_declared_input_fields():
    doc = _doc([INPUT, {"id": "x", "type": "InputNode"}], [])
    assert declared_input_fields(doc.nodes[0]) == {"question", "file"}
    assert declared_input_fields(doc.nodes[1]) is None


def test_every_input_node_checked():
    second = {"id": "in2", "type": "InputNode", "config": {"input_fields": ["image"]}}
    doc = _doc([INPUT, second], [_edge("in", "image"), _edge("in2", "image"), _edge("in2", "question")])
    errors = check_input_contracts(doc.nodes, doc.edges)
    assert [(e.node_id, e.index) for e in errors] == [("in", 0), ("in2", 2)]


def test_bool_source_is_not_numeric_input_node():
    node = dict(INPUT, id=1)
    doc = _doc([node], [_edge(True, "image"), _edge(1, "image")])
    errors = check_input_contracts(doc.nodes, doc.edges)
    assert [e.index for e in errors] == [1]
