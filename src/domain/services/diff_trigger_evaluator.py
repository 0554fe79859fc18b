"""Diff trigger evaluator domain service.

Decides whether an assessment update must be routed through the workflow
engine by diffing the proposed assessment against the stored one:

    triggered = (changed_fields & trigger_fields)
             or (added_objects & trigger_objects)

Field identifiers are attribute names (``financial_year``,
``usage_category``); object kinds are model class names (``UnitUsage``,
``Document``). Matching is exact and case-sensitive.

Collections are compared order-independently: elements are paired by
``id``, then by ``uuid`` (owners), and elements with neither are paired
by value. A paired element contributes the names of its differing
compared attributes; an unpaired element of the new assessment
contributes its class name as an added object. Any membership change
also marks the collection attribute itself as changed.

This is a pure domain service: no I/O, no logging, no mutation.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Iterable

from src.domain.models.assessment import Assessment

# Request metadata rather than assessment content
IGNORED_FIELDS: frozenset[str] = frozenset({"audit_details", "workflow"})

# Attributes that identify a collection element, in lookup order
IDENTITY_ATTRIBUTES: tuple[str, ...] = ("id", "uuid")


def _identity(item: Any) -> tuple[str, Any] | None:
    for attribute in IDENTITY_ATTRIBUTES:
        value = getattr(item, attribute, None)
        if value is not None:
            return (attribute, value)
    return None


def _element_attributes(item: Any) -> dict[str, Any]:
    if is_dataclass(item):
        return {
            f.name: getattr(item, f.name)
            for f in fields(item)
            if f.compare and f.name not in IDENTITY_ATTRIBUTES
        }
    return {"value": item}


def _changed_attributes(new_item: Any, stored_item: Any) -> set[str]:
    new_attrs = _element_attributes(new_item)
    stored_attrs = _element_attributes(stored_item)
    return {
        name
        for name in new_attrs.keys() | stored_attrs.keys()
        if new_attrs.get(name) != stored_attrs.get(name)
    }


def _diff_collection(
    name: str,
    new_items: Iterable[Any],
    stored_items: Iterable[Any],
) -> tuple[set[str], set[str]]:
    """Diff two collections; returns (changed field names, added object kinds)."""
    changed: set[str] = set()
    added: set[str] = set()

    stored_by_identity: dict[tuple[str, Any], Any] = {}
    stored_anonymous: list[Any] = []
    for item in stored_items:
        identity = _identity(item)
        if identity is None:
            stored_anonymous.append(item)
        else:
            stored_by_identity[identity] = item

    matched: set[tuple[str, Any]] = set()
    for item in new_items:
        identity = _identity(item)
        if identity is not None and identity in stored_by_identity:
            matched.add(identity)
            changed |= _changed_attributes(item, stored_by_identity[identity])
        elif identity is None and item in stored_anonymous:
            stored_anonymous.remove(item)
        else:
            added.add(type(item).__name__)

    removed = bool(stored_anonymous) or bool(stored_by_identity.keys() - matched)
    if added or removed:
        changed.add(name)
    return changed, added


def diff_assessments(new: Assessment, stored: Assessment) -> tuple[set[str], set[str]]:
    """Compute (changed_fields, added_objects) between two assessments.

    Args:
        new: The proposed assessment.
        stored: The assessment as currently stored.

    Returns:
        Tuple of changed field identifiers and added object kinds.
    """
    changed: set[str] = set()
    added: set[str] = set()

    for f in fields(Assessment):
        if f.name in IGNORED_FIELDS:
            continue
        new_value = getattr(new, f.name)
        stored_value = getattr(stored, f.name)
        if isinstance(new_value, list) or isinstance(stored_value, list):
            field_changed, field_added = _diff_collection(
                f.name, new_value or [], stored_value or []
            )
            changed |= field_changed
            added |= field_added
        elif new_value != stored_value:
            changed.add(f.name)

    return changed, added


class DiffTriggerEvaluator:
    """Decides whether an update enters the workflow path.

    Trigger sets are fixed at construction; build one evaluator per
    configuration rather than re-parsing configuration per call.

    Example:
        >>> evaluator = DiffTriggerEvaluator(
        ...     trigger_fields=frozenset({"usage_category"}),
        ...     trigger_objects=frozenset({"Document"}),
        ... )
        >>> evaluator.evaluate(assessment, assessment)
        False
    """

    def __init__(
        self,
        trigger_fields: frozenset[str],
        trigger_objects: frozenset[str],
    ) -> None:
        self._trigger_fields = frozenset(trigger_fields)
        self._trigger_objects = frozenset(trigger_objects)

    @property
    def trigger_fields(self) -> frozenset[str]:
        return self._trigger_fields

    @property
    def trigger_objects(self) -> frozenset[str]:
        return self._trigger_objects

    def evaluate(self, new: Assessment, stored: Assessment) -> bool:
        """Return True if the edit must be routed through the workflow engine."""
        changed_fields, added_objects = diff_assessments(new, stored)
        return bool(changed_fields & self._trigger_fields) or bool(
            added_objects & self._trigger_objects
        )
