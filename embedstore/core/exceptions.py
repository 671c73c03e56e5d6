"""
Exceptions raised by the embedding gateway and its engine adapters.
"""

from typing import Any, Dict, Optional


class EmbedStoreError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(EmbedStoreError):
    """
    Caller input was rejected before any engine call.

    Raised when:
    - external id is missing or empty
    - vector is empty or not numeric
    - payload is missing or not a mapping
    - search limit is not a positive integer
    """
    pass


class ProvisioningError(EmbedStoreError):
    """Collection creation failed for a reason other than "already exists"."""
    pass


class EngineError(EmbedStoreError):
    """The vector engine failed an upsert, search or delete."""

    def __init__(self, message: str, operation: str = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.operation = operation


class CollectionExistsError(EmbedStoreError):
    """Engine adapter signal: the collection was already created."""
    pass


class CollectionNotFoundError(EmbedStoreError):
    """Engine adapter signal: the collection does not exist."""
    pass
