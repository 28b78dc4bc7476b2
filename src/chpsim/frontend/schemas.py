# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Frontend schema definitions."""
import json


def get_config_schema() -> dict:
    """Utility function to get the simulation config json schema."""
    schema = """{
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "general": {
                "type": "object",
                "properties": {
                    "seed": {
                        "type": "integer"
                    },
                    "shots": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 1000000
                    }
                }
            },
            "circuit": {
                "type": "object",
                "properties": {
                    "circuit": {
                        "type": "string"
                    },
                    "circuit_path": {
                        "type": "string"
                    },
                    "qubits": {
                        "type": "integer",
                        "minimum": 0
                    }
                },
                "oneOf": [
                    {"required": ["circuit"]},
                    {"required": ["circuit_path"]}
                ]
            }
        },
        "required": ["circuit"]
    }"""
    return json.loads(schema)
