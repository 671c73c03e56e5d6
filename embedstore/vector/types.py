"""
Vector value types shared by the gateway, the engine adapters and the API layer.
Records live in the external engine; these types only describe them in flight.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field


@dataclass
class EmbeddingRecord:
    """Represents one logical record as the caller sees it."""

    external_id: str
    """Caller-supplied identifier, arbitrary format"""

    internal_id: str
    """UUID-shaped engine identifier derived from external_id"""

    vector: List[float]
    """The embedding, fixed dimensionality per collection"""

    payload: Dict[str, Any]
    """Metadata stored with the vector, always carrying original_id"""


@dataclass
class CollectionDescriptor:
    """Name, width and metric of the engine collection."""

    name: str
    dimension: int
    distance: str = "cosine"


@dataclass
class EnginePoint:
    """A single point handed to the engine on upsert."""

    id: str
    vector: List[float]
    payload: Dict[str, Any]


@dataclass
class EngineHit:
    """A raw search hit as returned by the engine."""

    id: str
    score: float
    payload: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class FieldMatch:
    """Equality clause: payload[key] must equal value."""

    key: str
    value: Any


@dataclass(frozen=True)
class EqualityFilter:
    """Conjunction of equality clauses. An empty filter matches everything."""

    must: tuple = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return bool(self.must)


@dataclass
class SearchHit:
    """Reconciled search result, carrying the caller's id."""

    id: str
    score: float


@dataclass
class StoreResult:
    """Both identifiers of a record touched by store or delete."""

    external_id: str
    internal_id: str
