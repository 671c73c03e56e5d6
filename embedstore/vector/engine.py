"""
Vector engine port and an in-memory cosine implementation.
The gateway only talks to engines through this interface.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set

import numpy as np

from ..core.exceptions import CollectionExistsError, CollectionNotFoundError
from .filters import matches
from .types import CollectionDescriptor, EngineHit, EnginePoint, EqualityFilter


class VectorEngine(ABC):
    """Abstract interface for an external vector-search engine."""

    @abstractmethod
    def list_collections(self) -> Set[str]:
        """Return the names of all existing collections."""
        pass

    @abstractmethod
    def create_collection(self, name: str, dimension: int, distance: str = "cosine") -> None:
        """Create a collection. Raises CollectionExistsError if it already exists."""
        pass

    @abstractmethod
    def upsert(self, collection: str, points: List[EnginePoint]) -> None:
        """Insert or fully replace points keyed by id."""
        pass

    @abstractmethod
    def search(self, collection: str, vector: List[float], limit: int,
               query_filter: Optional[EqualityFilter] = None,
               with_payload: bool = True, with_vector: bool = False) -> List[EngineHit]:
        """Return up to limit hits ordered by score, descending."""
        pass

    @abstractmethod
    def delete(self, collection: str, ids: List[str]) -> None:
        """Delete points by id. Missing ids are ignored."""
        pass


class InMemoryVectorEngine(VectorEngine):
    """In-memory engine using cosine similarity, safe for concurrent callers."""

    def __init__(self):
        self._lock = threading.Lock()
        self._collections: Dict[str, CollectionDescriptor] = {}
        self._points: Dict[str, Dict[str, EnginePoint]] = {}  # collection -> id -> point
        self._index: Dict[str, Dict[str, np.ndarray]] = {}    # collection -> id -> normalized vector

    def list_collections(self) -> Set[str]:
        with self._lock:
            return set(self._collections)

    def create_collection(self, name: str, dimension: int, distance: str = "cosine") -> None:
        if distance != "cosine":
            raise ValueError(f"Unsupported distance: {distance}")
        if dimension < 1:
            raise ValueError(f"Invalid dimension: {dimension}")
        with self._lock:
            if name in self._collections:
                raise CollectionExistsError(f"Collection {name} already exists")
            self._collections[name] = CollectionDescriptor(name=name, dimension=dimension, distance=distance)
            self._points[name] = {}
            self._index[name] = {}

    def describe(self, name: str) -> CollectionDescriptor:
        """Return the descriptor of an existing collection."""
        with self._lock:
            return self._get_collection(name)

    def count(self, name: str) -> int:
        """Number of points stored in a collection."""
        with self._lock:
            self._get_collection(name)
            return len(self._points[name])

    def upsert(self, collection: str, points: List[EnginePoint]) -> None:
        with self._lock:
            descriptor = self._get_collection(collection)
            # Validate the whole batch before touching state
            for point in points:
                if len(point.vector) != descriptor.dimension:
                    raise ValueError(
                        f"Vector dimension {len(point.vector)} does not match "
                        f"expected dimension {descriptor.dimension}"
                    )

            for point in points:
                vector = np.asarray(point.vector, dtype=np.float64)
                norm = np.linalg.norm(vector)
                self._index[collection][point.id] = vector / norm if norm > 0 else vector
                self._points[collection][point.id] = EnginePoint(
                    id=point.id,
                    vector=list(point.vector),
                    payload=dict(point.payload),
                )

    def search(self, collection: str, vector: List[float], limit: int,
               query_filter: Optional[EqualityFilter] = None,
               with_payload: bool = True, with_vector: bool = False) -> List[EngineHit]:
        with self._lock:
            descriptor = self._get_collection(collection)
            if len(vector) != descriptor.dimension:
                raise ValueError(
                    f"Vector dimension {len(vector)} does not match "
                    f"expected dimension {descriptor.dimension}"
                )

            query = np.asarray(vector, dtype=np.float64)
            norm = np.linalg.norm(query)
            if norm == 0:
                return []
            normalized_query = query / norm

            # Calculate cosine similarities for points passing the filter
            similarities = []
            for point_id, stored_vector in self._index[collection].items():
                point = self._points[collection][point_id]
                if query_filter and not matches(query_filter, point.payload):
                    continue
                similarities.append((point_id, float(np.dot(normalized_query, stored_vector))))

            similarities.sort(key=lambda item: item[1], reverse=True)

            hits = []
            for point_id, score in similarities[:limit]:
                payload = dict(self._points[collection][point_id].payload) if with_payload else None
                hits.append(EngineHit(id=point_id, score=score, payload=payload))
            return hits

    def delete(self, collection: str, ids: List[str]) -> None:
        with self._lock:
            self._get_collection(collection)
            for point_id in ids:
                self._points[collection].pop(point_id, None)
                self._index[collection].pop(point_id, None)

    def clear(self) -> None:
        """Drop every collection."""
        with self._lock:
            self._collections.clear()
            self._points.clear()
            self._index.clear()

    def _get_collection(self, name: str) -> CollectionDescriptor:
        descriptor = self._collections.get(name)
        if descriptor is None:
            raise CollectionNotFoundError(f"Collection {name} not found")
        return descriptor
