"""
Vector layer: id mapping, payload enrichment, filters, reconciliation,
collection provisioning and engine adapters.
"""

from .engine import VectorEngine, InMemoryVectorEngine
from .qdrant_engine import QdrantVectorEngine
from .ids import IdentifierMapper, map_id
from .provisioner import CollectionProvisioner
from .types import (
    CollectionDescriptor,
    EmbeddingRecord,
    EngineHit,
    EnginePoint,
    EqualityFilter,
    FieldMatch,
    SearchHit,
    StoreResult,
)

__all__ = [
    'VectorEngine',
    'InMemoryVectorEngine',
    'QdrantVectorEngine',
    'IdentifierMapper',
    'map_id',
    'CollectionProvisioner',
    'CollectionDescriptor',
    'EmbeddingRecord',
    'EngineHit',
    'EnginePoint',
    'EqualityFilter',
    'FieldMatch',
    'SearchHit',
    'StoreResult',
]
