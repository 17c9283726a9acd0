"""Pure data models for policysummary. No I/O."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

ConditionValue = Union[str, int, float, bool, tuple, None]


class Operator(Enum):
    EQUALS = "equals"
    IN = "in"
    CONTAINS = "contains"
    NOT_EQUALS = "not_equals"
    NOT_IN = "not_in"
    NOT_CONTAINS = "not_contains"
    # Anything else (greater_than, includes, ...) is rendered verbatim.
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str) -> Operator:
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


class Effect(Enum):
    ALLOW = "Allow"
    DENY = "Deny"


class PolicyStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DRAFT = "Draft"


@dataclass(frozen=True)
class AttributeCondition:
    """One constraint such as ``department equals Engineering``."""

    name: str
    operator: str
    value: ConditionValue

    @property
    def kind(self) -> Operator:
        return Operator.parse(self.operator)


@dataclass(frozen=True)
class SubjectRef:
    type: str
    attributes: tuple[AttributeCondition, ...] = field(default=())


@dataclass(frozen=True)
class ActionRef:
    name: str
    display_name: str = ""


@dataclass(frozen=True)
class ObjectRef:
    type: str
    attributes: tuple[AttributeCondition, ...] = field(default=())


@dataclass(frozen=True)
class PolicyRule:
    """Subject performs action on object, under conditions."""

    subject: SubjectRef
    action: ActionRef
    object: ObjectRef
    id: Optional[str] = None


@dataclass(frozen=True)
class AdditionalResourceRef:
    """A named extra gate (approval state, ticket level) on the whole policy."""

    id: str
    attributes: tuple[AttributeCondition, ...] = field(default=())


@dataclass(frozen=True)
class Policy:
    """
    A CRAFT policy.

    ``rules`` take precedence over the flat ``subjects``/``actions``/
    ``resources`` arrays, which are the legacy form of the same policy.
    """

    name: str
    effect: str
    rules: tuple[PolicyRule, ...] = field(default=())
    subjects: tuple[str, ...] = field(default=())
    actions: tuple[str, ...] = field(default=())
    resources: tuple[str, ...] = field(default=())
    additional_resources: tuple[AdditionalResourceRef, ...] = field(default=())
    id: Optional[str] = None
    description: str = ""
    status: Optional[PolicyStatus] = None

    @property
    def is_allow(self) -> bool:
        return self.effect == Effect.ALLOW.value
