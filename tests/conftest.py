"""Shared pytest fixtures for policysummary tests."""
import json

import pytest


@pytest.fixture
def contractor_record():
    """A CRAFT policy record as served by the REST backend."""
    return {
        "_id": "65f0c0ffee",
        "name": "p1",
        "description": "Contractors may not delete invoices",
        "effect": "Deny",
        "status": "Active",
        "rules": [
            {
                "id": "rule-1",
                "subject": {
                    "type": "Contractor",
                    "attributes": [
                        {"name": "Region", "operator": "equals", "value": "EU"}
                    ],
                },
                "action": {"name": "delete", "displayName": "Delete"},
                "object": {"type": "Invoice", "attributes": []},
            }
        ],
        "subjects": [],
        "actions": [],
        "resources": [],
    }


@pytest.fixture
def flat_record():
    return {
        "id": "pol-2",
        "name": "Readers",
        "effect": "Allow",
        "status": "Draft",
        "subjects": ["Alice", "Bob"],
        "actions": ["Read"],
        "resources": ["Reports"],
    }


@pytest.fixture
def policy_file(tmp_path, contractor_record, flat_record):
    path = tmp_path / "policies.json"
    path.write_text(
        json.dumps({"success": True, "data": [contractor_record, flat_record]}),
        encoding="utf-8",
    )
    return path
