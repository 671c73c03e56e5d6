"""
embedstore - store and search embeddings by caller id over a vector engine.
"""

from .core.config import VERSION as __version__
from .core.exceptions import (
    EmbedStoreError,
    EngineError,
    ProvisioningError,
    ValidationError,
)
from .core.gateway import VectorStoreGateway, build_gateway

__all__ = [
    'EmbedStoreError',
    'EngineError',
    'ProvisioningError',
    'ValidationError',
    'VectorStoreGateway',
    'build_gateway',
]
