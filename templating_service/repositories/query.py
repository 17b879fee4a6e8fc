"""
Filter construction for partial-entity queries.

A partial entity (a User or Template with only some fields set, or a plain
mapping of stored field names) is turned into a FilterExpression made of
typed clauses:

- EqualsClause: the stored field must equal the given value.
- ContainsAllClause: the stored list must contain every given value,
  ignoring order and extra elements.

A FilterExpression renders to a MongoDB filter document and can also be
evaluated against a document in-process.
"""

import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel


logger = logging.getLogger(__name__)


PartialEntity = Union[BaseModel, Mapping[str, Any]]


@dataclass(frozen=True)
class EqualsClause:
    """Exact match on a single field."""

    field: str
    value: Any

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: self.value}

    def matches(
        self,
        document: Mapping[str, Any],
    ) -> bool:
        stored = document.get(self.field)
        if self.value is None:
            return stored is None
        # A scalar compared against a stored list matches any element
        if isinstance(stored, list) and not isinstance(self.value, list):
            return self.value in stored
        return stored == self.value


@dataclass(frozen=True)
class ContainsAllClause:
    """Every value must be present in the stored list field."""

    field: str
    values: tuple[Any, ...]

    def to_mongo(self) -> dict[str, Any]:
        # $all over zero values matches nothing server-side; leave the field unconstrained
        if not self.values:
            return {}
        return {self.field: {"$all": list(self.values)}}

    def matches(
        self,
        document: Mapping[str, Any],
    ) -> bool:
        # Containment over zero values holds for any document
        if not self.values:
            return True
        stored = document.get(self.field)
        if stored is None:
            return False
        if not isinstance(stored, list):
            stored = [stored]
        return all(value in stored for value in self.values)


FilterClause = EqualsClause | ContainsAllClause


@dataclass(frozen=True)
class FilterExpression:
    """Conjunction of clauses; no clauses matches every document."""

    clauses: tuple[FilterClause, ...] = ()

    def to_mongo(self) -> dict[str, Any]:
        query: dict[str, Any] = {}
        for clause in self.clauses:
            query.update(clause.to_mongo())
        return query

    def matches(
        self,
        document: Mapping[str, Any],
    ) -> bool:
        return all(clause.matches(document) for clause in self.clauses)


def partial_fields(
    partial: PartialEntity | None,
) -> dict[str, Any]:
    """Return the explicitly provided fields of a partial entity, keyed by stored name."""
    if partial is None:
        return {}
    if isinstance(partial, BaseModel):
        return partial.model_dump(by_alias=True, exclude_unset=True)
    return dict(partial)


def _is_value_list(
    value: Any,
) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def build_filter(
    partial: PartialEntity | None,
    contains_all_fields: Iterable[str] = (),
) -> FilterExpression:
    """
    Build a filter expression from a partial entity.

    Args:
        partial: Entity model or mapping; absent fields are unconstrained
        contains_all_fields: Stored list fields that require every given
            value to be present rather than an exact match

    Returns:
        FilterExpression combining one clause per provided field
    """
    list_fields = frozenset(contains_all_fields)
    clauses: list[FilterClause] = []

    for field, value in partial_fields(partial).items():
        if field in list_fields and value is not None and _is_value_list(value):
            clauses.append(ContainsAllClause(field=field, values=tuple(value)))
        else:
            clauses.append(EqualsClause(field=field, value=value))

    expression = FilterExpression(clauses=tuple(clauses))
    logger.debug(f"Built filter: {expression.to_mongo()}")
    return expression


def build_entity_filter(
    partial: PartialEntity | None,
    entity_type: type[BaseModel],
) -> FilterExpression:
    """Build a filter using the contains-all fields declared on an entity model."""
    return build_filter(
        partial,
        contains_all_fields=getattr(entity_type, "contains_all_fields", frozenset()),
    )


def new_document(
    entity: PartialEntity,
) -> dict[str, Any]:
    """Stored form of an entity to insert, with an id assigned when missing."""
    doc = {key: value for key, value in partial_fields(entity).items() if value is not None}
    if not doc.get("id"):
        doc["id"] = uuid.uuid4().hex
    return doc
