"""
Search filter construction. Filters are engine-neutral conjunctions of
equality clauses; engine adapters translate them to their own query models.
"""

from typing import Any, Mapping, Optional

from ..core.config import VISIBILITY_FIELD
from .types import EqualityFilter, FieldMatch


def build(field_values: Optional[Mapping[str, Any]]) -> EqualityFilter:
    """Build one equality clause per entry, sorted by field name so order never matters."""
    if not field_values:
        return EqualityFilter()
    clauses = tuple(
        FieldMatch(key=key, value=value)
        for key, value in sorted(field_values.items(), key=lambda item: str(item[0]))
    )
    return EqualityFilter(must=clauses)


def visibility_filter(field: str = VISIBILITY_FIELD) -> EqualityFilter:
    """Default predicate: only records flagged visible."""
    return EqualityFilter(must=(FieldMatch(key=field, value=True),))


def combine(*filters: EqualityFilter) -> EqualityFilter:
    """Conjoin filters, dropping duplicate clauses."""
    clauses = []
    for query_filter in filters:
        for clause in query_filter.must:
            if clause not in clauses:
                clauses.append(clause)
    return EqualityFilter(must=tuple(clauses))


def matches(query_filter: EqualityFilter, payload: Optional[Mapping[str, Any]]) -> bool:
    """Evaluate a filter against a payload.

    A list-valued payload field matches when any element equals the clause value.
    """
    payload = payload or {}
    for clause in query_filter.must:
        if clause.key not in payload:
            return False
        stored = payload[clause.key]
        if isinstance(stored, (list, tuple)):
            if not any(_equals(item, clause.value) for item in stored):
                return False
        elif not _equals(stored, clause.value):
            return False
    return True


def _equals(stored: Any, wanted: Any) -> bool:
    # True == 1 in Python; keep booleans and numbers apart
    if isinstance(stored, bool) != isinstance(wanted, bool):
        return False
    return stored == wanted
