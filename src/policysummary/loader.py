"""Parse CRAFT policy JSON records into Policy models.

Accepts the camelCase shape served by the CRAFT REST backend, either as a
bare record, a list of records, or wrapped in the ``{"success", "data"}``
response envelope.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from .models import (
    ActionRef,
    AdditionalResourceRef,
    AttributeCondition,
    ObjectRef,
    Policy,
    PolicyRule,
    PolicyStatus,
    SubjectRef,
)


class PolicyFormatError(ValueError):
    """Raised when a policy record is missing a required field or is not JSON."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


def policy_from_dict(data: dict, path: str = "") -> Policy:
    """
    Build a Policy from one CRAFT policy record.

    Optional lists (``rules``, ``subjects``, ``additionalResources``, nested
    ``attributes``) may be missing or ``null`` and are read as empty.

    Raises:
        PolicyFormatError: a required field is missing or has the wrong type.
    """
    _expect_mapping(data, path or "policy")
    return Policy(
        name=_required_str(data, "name", path),
        effect=_required_str(data, "effect", path),
        rules=tuple(
            _rule_from_dict(r, _join(path, f"rules[{i}]"))
            for i, r in enumerate(_optional_list(data, "rules", path))
        ),
        subjects=_str_tuple(data, "subjects", path),
        actions=_str_tuple(data, "actions", path),
        resources=_str_tuple(data, "resources", path),
        additional_resources=tuple(
            _additional_from_dict(r, _join(path, f"additionalResources[{i}]"))
            for i, r in enumerate(_optional_list(data, "additionalResources", path))
        ),
        id=_record_id(data),
        description=data.get("description") or "",
        status=_status(data, path),
    )


def policies_from_json(payload: Any) -> list[Policy]:
    """Return every policy in *payload* (record, list, or REST envelope)."""
    if isinstance(payload, dict) and "data" in payload and "name" not in payload:
        payload = payload["data"]
    if isinstance(payload, list):
        return [policy_from_dict(p, f"[{i}]") for i, p in enumerate(payload)]
    return [policy_from_dict(payload)]


def load_policies(path: str | Path) -> list[Policy]:
    """
    Read an exported policy JSON file.

    Raises:
        PolicyFormatError: the file is not valid JSON or a record is malformed.
        OSError: the file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    return loads_policies(text)


def loads_policies(text: str) -> list[Policy]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PolicyFormatError(f"Invalid JSON: {exc}") from exc
    return policies_from_json(payload)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _rule_from_dict(data: Any, path: str) -> PolicyRule:
    _expect_mapping(data, path)
    subject = data.get("subject")
    action = data.get("action")
    obj = data.get("object")
    _expect_mapping(subject, _join(path, "subject"))
    _expect_mapping(action, _join(path, "action"))
    _expect_mapping(obj, _join(path, "object"))

    subject_path = _join(path, "subject")
    object_path = _join(path, "object")
    return PolicyRule(
        subject=SubjectRef(
            type=_required_str(subject, "type", subject_path),
            attributes=_attributes(subject, subject_path),
        ),
        action=ActionRef(
            name=_required_str(action, "name", _join(path, "action")),
            display_name=action.get("displayName") or "",
        ),
        object=ObjectRef(
            type=_required_str(obj, "type", object_path),
            attributes=_attributes(obj, object_path),
        ),
        id=data.get("id"),
    )


def _additional_from_dict(data: Any, path: str) -> AdditionalResourceRef:
    _expect_mapping(data, path)
    return AdditionalResourceRef(
        id=_required_str(data, "id", path),
        attributes=_attributes(data, path),
    )


def _attributes(data: dict, path: str) -> tuple[AttributeCondition, ...]:
    conditions = []
    for i, attr in enumerate(_optional_list(data, "attributes", path)):
        attr_path = _join(path, f"attributes[{i}]")
        _expect_mapping(attr, attr_path)
        value = attr.get("value")
        if isinstance(value, list):
            value = tuple(value)
        conditions.append(
            AttributeCondition(
                name=_required_str(attr, "name", attr_path),
                operator=_required_str(attr, "operator", attr_path),
                value=value,
            )
        )
    return tuple(conditions)


def _status(data: dict, path: str) -> Optional[PolicyStatus]:
    raw = data.get("status")
    if raw is None:
        return None
    try:
        return PolicyStatus(raw)
    except ValueError:
        raise PolicyFormatError(
            f"Unknown policy status {raw!r}. Expected Active, Inactive, or Draft.",
            path=_join(path, "status"),
        ) from None


def _record_id(data: dict) -> Optional[str]:
    raw = data.get("id", data.get("_id"))
    return str(raw) if raw is not None else None


def _required_str(data: dict, key: str, path: str) -> str:
    value = data.get(key)
    field_path = _join(path, key)
    if value is None:
        raise PolicyFormatError(f"Missing required field {field_path!r}.", path=field_path)
    if not isinstance(value, str):
        raise PolicyFormatError(
            f"Field {field_path!r} must be a string, got {type(value).__name__}.",
            path=field_path,
        )
    return value


def _optional_list(data: dict, key: str, path: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        field_path = _join(path, key)
        raise PolicyFormatError(
            f"Field {field_path!r} must be a list, got {type(value).__name__}.",
            path=field_path,
        )
    return value


def _str_tuple(data: dict, key: str, path: str) -> tuple[str, ...]:
    items = []
    for i, v in enumerate(_optional_list(data, key, path)):
        if v is None:
            item_path = _join(path, f"{key}[{i}]")
            raise PolicyFormatError(f"Null entry at {item_path!r}.", path=item_path)
        items.append(str(v))
    return tuple(items)


def _expect_mapping(value: Any, path: str) -> None:
    if not isinstance(value, dict):
        kind = "missing" if value is None else type(value).__name__
        raise PolicyFormatError(
            f"Expected an object at {path!r}, got {kind}.", path=path
        )


def _join(path: str, key: str) -> str:
    if not path:
        return key
    if key.startswith("["):
        return f"{path}{key}"
    return f"{path}.{key}"
