"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "opcrash report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "expected", "crashes", "errors", "seed", "depth", "duration_s"],
            "properties": {
                "total": {"type": "integer"},
                "passed": {"type": "integer"},
                "expected": {"type": "integer"},
                "crashes": {"type": "integer"},
                "errors": {"type": "integer"},
                "seed": {"type": "integer"},
                "depth": {"type": "integer", "minimum": 1},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type", "index", "operation", "status", "duration_ms", "source"],
                "properties": {
                    "id": {"type": "string"},
                    "type": {"type": "string"},
                    "index": {"type": "integer", "minimum": 0},
                    "operation": {"type": "string"},
                    "status": {"enum": ["passed", "expected", "crash", "error"]},
                    "duration_ms": {"type": "number"},
                    "source": {"type": "string"},
                    "error": {"type": "string"},
                    "error_type": {"type": "string"},
                },
            },
        },
    },
}
