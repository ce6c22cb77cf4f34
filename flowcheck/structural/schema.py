#flowcheck/structural/schema.py
# Keep in sync with the backend's workflow schema; node types the backend adds
# can be supplied at runtime with `flowcheck validate --schemas extra.json`.

WORKFLOW_SCHEMA = {
    "type": "object",
    "required": ["name", "nodes", "edges"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "nodes": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type", "config"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "type": {"type": "string"},
                    "config": {"type": "object"}
                }
            }
        },
        "edges": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["source", "target", "data"],
                "properties": {
                    # must reference an existing node id
                    "source": {"type": "string"},
                    "target": {"type": "string"},
                    "data": {
                        "type": "object",
                        "required": ["sourceOutput", "targetInput"],
                        "properties": {
                            "sourceOutput": {"type": "string"},
                            "targetInput": {"type": "string"}
                        }
                    }
                }
            }
        },
        "config": {"type": "object"}
    }
}


# Per node type: JSON Schema of `node.config`.
# None of the built-in types declares `required`; extra fields are always allowed.
NODE_TYPE_SCHEMAS = {
    "LLMNode": {
        "type": "object",
        "properties": {
            "model": {"type": "string"},
            "system_prompt": {"type": "string"},
            "tools": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["name", "description"],
                    "properties": {
                        "name": {"type": "string"},
                        "description": {"type": "string"},
                        "parameters": {"type": "object"}
                    }
                }
            },
            "max_tokens": {"type": "integer", "minimum": 1},
            "temperature": {"type": "number", "minimum": 0, "maximum": 2},
            "memory_enabled": {"type": "boolean"},
            "memory_window_size": {"type": "integer", "minimum": 1}
        }
    },
    "HttpRequestNode": {
        "type": "object",
        "properties": {
            "method": {
                "type": "string",
                "enum": ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]
            },
            "url": {"type": "string"},
            "headers": {"type": "object"},
            "timeout": {"type": "integer", "minimum": 1},
            "retry_count": {"type": "integer", "minimum": 0},
            "retry_backoff": {"type": "number", "minimum": 1},
            "verify_ssl": {"type": "boolean"}
        }
    },
    "FileParserNode": {
        "type": "object",
        "properties": {
            "file_type": {
                "type": "string",
                "enum": ["auto", "json", "csv", "yaml", "xml", "text"]
            },
            "csv_delimiter": {"type": "string"},
            "csv_quotechar": {"type": "string"},
            "encoding": {"type": "string"},
            "strict_mode": {"type": "boolean"},
            "supported_formats": {
                "type": "array",
                "items": {"type": "string"}
            },
            "extraction_mode": {"type": "string"},
            "table_extraction": {"type": "boolean"},
            "ocr_enabled": {"type": "boolean"},
            "max_file_size_mb": {"type": "number"}
        }
    },
    "DataTransformNode": {
        "type": "object",
        "properties": {
            # a single transformation object, or a list of them
            "transformations": {
                "oneOf": [
                    {"type": "object"},
                    {"type": "array", "items": {"type": "object"}}
                ]
            },
            "default_values": {"type": "object"},
            "output_schema": {"type": "object"}
        }
    },
    "InputNode": {
        "type": "object",
        "properties": {
            "input_fields": {
                "type": "array",
                "items": {"type": "string"}
            }
        }
    },
    "OutputNode": {
        "type": "object",
        "properties": {
            "output_fields": {
                "type": "array",
                "items": {"type": "string"}
            }
        }
    }
}

INPUT_NODE_TYPE = "InputNode"
