"""Render a Policy as one human-readable sentence."""
from __future__ import annotations

from typing import Optional, Sequence

from .models import (
    AdditionalResourceRef,
    AttributeCondition,
    ConditionValue,
    Operator,
    Policy,
    PolicyRule,
)

DEFAULT_MAX_LENGTH = 120

_OPERATOR_PHRASES: dict[Operator, str] = {
    Operator.EQUALS: "is",
    Operator.IN: "in",
    Operator.CONTAINS: "contains",
    Operator.NOT_EQUALS: "is not",
    Operator.NOT_IN: "not in",
    Operator.NOT_CONTAINS: "does not contain",
}


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def format_attribute_conditions(attributes: Sequence[AttributeCondition]) -> str:
    """
    Render *attributes* as ``"region is US, and department is Engineering"``.

    Conditions with an empty or missing value are skipped.  The last of two
    or more clauses is prefixed with ``"and "`` and the comma before it is
    kept.
    """
    kept = [a for a in attributes if not _is_blank(a.value)]
    clauses = [_condition_clause(a) for a in kept]
    if len(clauses) > 1:
        clauses[-1] = f"and {clauses[-1]}"
    return ", ".join(clauses)


def format_list(items: Sequence[str]) -> str:
    """Join *items* as ``"A"``, ``"A and B"`` or ``"A, B, and C"``."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def format_policy_rule(rule: PolicyRule) -> str:
    """Render one rule as ``"{subject} to perform {action} actions on {object}"``."""
    subject_text = rule.subject.type
    conditions = format_attribute_conditions(rule.subject.attributes)
    if conditions:
        subject_text += f" (when {conditions})"

    action_name = (rule.action.display_name or rule.action.name).lower()

    object_text = rule.object.type
    conditions = format_attribute_conditions(rule.object.attributes)
    if conditions:
        object_text += f" (where {conditions})"

    return f"{subject_text} to perform {action_name} actions on {object_text}"


def format_additional_resources(resources: Sequence[AdditionalResourceRef]) -> str:
    """Join resource ids, each followed by its conditions in parentheses."""
    texts = []
    for res in resources:
        text = res.id
        conditions = format_attribute_conditions(res.attributes)
        if conditions:
            text += f" ({conditions})"
        texts.append(text)
    return format_list(texts)


def generate_policy_summary(policy: Optional[Policy]) -> str:
    """
    Describe what *policy* allows or denies in a single sentence.

    Detailed rules win over the flat subject/action/resource arrays when
    both are present.  Returns ``""`` for a missing policy.
    """
    if not policy:
        return ""

    effect_text = "ALLOWS" if policy.is_allow else "DENIES"

    if policy.rules:
        rule_text = "; ".join(format_policy_rule(r) for r in policy.rules)
        summary = f"This policy {effect_text} {rule_text}"
        if policy.additional_resources:
            extra = format_additional_resources(policy.additional_resources)
            summary += f" if {extra}"
        return summary + "."

    subjects_text = format_list(policy.subjects) if policy.subjects else "All users"
    actions_text = (
        format_list([a.lower() for a in policy.actions])
        if policy.actions
        else "any action"
    )
    resources_text = format_list(policy.resources) if policy.resources else "any resource"

    summary = (
        f"This policy {effect_text} {subjects_text} to perform "
        f"{actions_text} actions on {resources_text}"
    )
    if policy.additional_resources:
        extra = format_additional_resources(policy.additional_resources)
        summary += f" and on additional resources {extra}"
    return summary + "."


def generate_short_policy_summary(
    policy: Optional[Policy], max_length: int = DEFAULT_MAX_LENGTH
) -> str:
    """Full summary cut to *max_length* characters, ending in ``"..."``."""
    full = generate_policy_summary(policy)
    if len(full) <= max_length:
        return full
    # Raw character cut; table column widths depend on the exact length.
    return full[: max(max_length - 3, 0)] + "..."


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_blank(value: ConditionValue) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _condition_clause(attr: AttributeCondition) -> str:
    name = attr.name.lower()
    value = _render_value(attr.value)
    kind = attr.kind
    if kind is Operator.OTHER:
        return f"{name} {attr.operator} {value}"
    return f"{name} {_OPERATOR_PHRASES[kind]} {value}"


def _render_value(value: ConditionValue) -> str:
    if isinstance(value, (list, tuple)):
        return " or ".join(_render_scalar(v) for v in value)
    return _render_scalar(value)


def _render_scalar(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
