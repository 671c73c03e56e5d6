"""
Vector store gateway: store, delete and search embeddings keyed by caller ids,
over an injected vector engine.
"""

import numbers
from typing import Any, List, Mapping, Optional, Sequence

from ..util.logging import logger, sanitize_payload
from ..vector import filters, payload as payload_enricher
from ..vector.engine import VectorEngine
from ..vector.ids import IdentifierMapper
from ..vector.provisioner import CollectionProvisioner
from ..vector.reconcile import reconcile
from ..vector.types import EmbeddingRecord, EnginePoint, SearchHit, StoreResult
from .config import (
    DEFAULT_ID_NAMESPACE,
    DEFAULT_SEARCH_LIMIT,
    FILTER_MODES,
    MAX_SEARCH_LIMIT,
    ORIGINAL_ID_FIELD,
    VISIBILITY_FIELD,
)
from .exceptions import CollectionNotFoundError, EngineError, ValidationError


def _validate_external_id(external_id: Any) -> str:
    if not isinstance(external_id, str) or not external_id:
        raise ValidationError("id must be a non-empty string", details={"field": "id"})
    return external_id


def _validate_vector(vector: Any, field: str = "vector") -> List[float]:
    """Accept any non-empty sequence of real numbers (lists, tuples, numpy arrays)."""
    if vector is None or isinstance(vector, (str, bytes, Mapping)):
        raise ValidationError(f"{field} must be a non-empty array of numbers", details={"field": field})
    try:
        values = list(vector)
    except TypeError:
        raise ValidationError(f"{field} must be a non-empty array of numbers", details={"field": field})
    if not values:
        raise ValidationError(f"{field} must be a non-empty array of numbers", details={"field": field})
    for value in values:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValidationError(f"{field} must contain only numbers", details={"field": field})
    return [float(value) for value in values]


def _validate_filter(field_values: Any) -> None:
    """Field names must be strings; values must be exact-match keywords, integers or booleans."""
    if field_values is None:
        return
    if not isinstance(field_values, Mapping):
        raise ValidationError("filter must be an object", details={"field": "filter"})
    for key, value in field_values.items():
        if not isinstance(key, str) or not key:
            raise ValidationError("filter field names must be non-empty strings", details={"field": "filter"})
        if not isinstance(value, (str, bool, numbers.Integral)):
            raise ValidationError(
                f"filter value for '{key}' must be a string, integer or boolean",
                details={"field": "filter", "key": key},
            )


def _validate_limit(limit: Any) -> int:
    if isinstance(limit, bool) or not isinstance(limit, numbers.Integral):
        raise ValidationError("limit must be a positive integer", details={"field": "limit"})
    if limit <= 0:
        raise ValidationError("limit must be a positive integer", details={"field": "limit", "value": limit})
    return min(int(limit), MAX_SEARCH_LIMIT)


class VectorStoreGateway:
    """
    Stores and queries embeddings under caller-chosen string ids.

    Caller ids are mapped to UUID engine ids, the original id is kept in the
    payload so results can be translated back, and the collection is
    created on first store. The gateway holds only immutable configuration,
    so one instance can serve concurrent callers.
    """

    def __init__(self, engine: VectorEngine, collection: str = "embeddings",
                 namespace=DEFAULT_ID_NAMESPACE, filter_mode: str = "and",
                 id_field: str = ORIGINAL_ID_FIELD, visibility_field: str = VISIBILITY_FIELD):
        if filter_mode not in FILTER_MODES:
            raise ValueError(f"Invalid filter_mode: {filter_mode}")
        self.engine = engine
        self.collection = collection
        self.filter_mode = filter_mode
        self.id_field = id_field
        self.visibility_field = visibility_field
        self.mapper = IdentifierMapper(namespace)
        self.provisioner = CollectionProvisioner(engine, collection)

    def store(self, external_id: str, vector: Sequence[float], payload: Mapping[str, Any]) -> StoreResult:
        """Create or fully replace the record for external_id."""
        external_id = _validate_external_id(external_id)
        values = _validate_vector(vector)
        if payload is None or not isinstance(payload, Mapping):
            raise ValidationError("payload must be an object", details={"field": "payload"})

        internal_id = self.mapper.map_id(external_id)

        self.provisioner.ensure(len(values))

        record = EmbeddingRecord(
            external_id=external_id,
            internal_id=internal_id,
            vector=values,
            payload=payload_enricher.enrich(payload, external_id, self.id_field),
        )
        point = EnginePoint(id=record.internal_id, vector=record.vector, payload=record.payload)
        try:
            self.engine.upsert(self.collection, [point])
        except Exception as e:
            logger.log_vector_operation("store", external_id, {"internal_id": internal_id, "error": str(e)}, status="failed")
            raise EngineError(f"Upsert failed: {e}", operation="upsert") from e

        logger.log_vector_operation("store", external_id, {
            "internal_id": internal_id,
            "dimension": len(values),
            "payload": sanitize_payload(record.payload),
        })
        return StoreResult(external_id=external_id, internal_id=internal_id)

    def delete(self, external_id: str) -> StoreResult:
        """Delete the record for external_id. Absent records are not an error."""
        external_id = _validate_external_id(external_id)
        internal_id = self.mapper.map_id(external_id)

        try:
            self.engine.delete(self.collection, [internal_id])
        except CollectionNotFoundError:
            # Nothing was ever stored, so the record is already gone
            logger.log_vector_operation("delete", external_id, {"internal_id": internal_id}, status="absent")
            return StoreResult(external_id=external_id, internal_id=internal_id)
        except Exception as e:
            logger.log_vector_operation("delete", external_id, {"internal_id": internal_id, "error": str(e)}, status="failed")
            raise EngineError(f"Delete failed: {e}", operation="delete") from e

        logger.log_vector_operation("delete", external_id, {"internal_id": internal_id})
        return StoreResult(external_id=external_id, internal_id=internal_id)

    def search(self, query_vector: Sequence[float], limit: int = DEFAULT_SEARCH_LIMIT,
               filter: Optional[Mapping[str, Any]] = None, filter_mode: Optional[str] = None) -> List[SearchHit]:
        """
        Return the closest visible records, best first, at most limit of them.

        Args:
            query_vector: The vector to compare against
            limit: Maximum number of results; values above 100 are clamped
            filter: Optional field -> value equality constraints
            filter_mode: "and" keeps the visibility restriction alongside a
                custom filter, "replace" drops it; defaults to the gateway's mode

        Returns:
            List of SearchHit with the caller's ids and similarity scores
        """
        values = _validate_vector(query_vector)
        limit = _validate_limit(limit)
        _validate_filter(filter)
        mode = filter_mode or self.filter_mode
        if mode not in FILTER_MODES:
            raise ValidationError(f"filter_mode must be one of: {list(FILTER_MODES)}", details={"field": "filter_mode"})

        query_filter = self._build_filter(filter, mode)

        try:
            hits = self.engine.search(
                self.collection,
                values,
                limit,
                query_filter=query_filter,
                with_payload=True,
                with_vector=False,
            )
        except CollectionNotFoundError:
            logger.debug(f"Search on missing collection {self.collection}, returning no results")
            return []
        except Exception as e:
            logger.log_vector_operation("search", "-", {"error": str(e)}, status="failed")
            raise EngineError(f"Search failed: {e}", operation="search") from e

        results = reconcile(hits[:limit], self.id_field)
        logger.log_vector_operation("search", "-", {
            "limit": limit,
            "filter_mode": mode if filter else "default",
            "results": len(results),
        })
        return results

    def _build_filter(self, custom: Optional[Mapping[str, Any]], mode: str):
        default = filters.visibility_filter(self.visibility_field)
        if not custom:
            return default
        if mode == "replace":
            return filters.build(custom)
        return filters.combine(default, filters.build(custom))


def build_gateway(engine: Optional[VectorEngine] = None) -> VectorStoreGateway:
    """Build a gateway from process configuration."""
    from . import config

    issues = config.validate_config()
    if issues:
        raise ValueError(f"Invalid configuration: {'; '.join(issues)}")

    return VectorStoreGateway(
        engine if engine is not None else config.get_vector_engine(),
        collection=config.get_collection_name(),
        namespace=config.get_id_namespace(),
        filter_mode=config.get_filter_mode(),
    )
