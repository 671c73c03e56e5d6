"""
Process configuration for the embedding gateway.
Values are read once from the environment (and a local .env file when present).
"""

import os
import uuid

from dotenv import load_dotenv

load_dotenv()

# Engine connection
QDRANT_URL = os.getenv("QDRANT_URL", "http://localhost:6333")
QDRANT_API_KEY = os.getenv("QDRANT_API_KEY", "")
QDRANT_COLLECTION = os.getenv("QDRANT_COLLECTION", "embeddings")
QDRANT_TIMEOUT_SEC = int(os.getenv("QDRANT_TIMEOUT_SEC", "30"))

# Engine backend: qdrant|memory
EMBEDSTORE_ENGINE = os.getenv("EMBEDSTORE_ENGINE", "qdrant")

# Namespace for deriving engine ids from caller ids
DEFAULT_ID_NAMESPACE = "1b671a64-40d5-491e-99b0-da01ff1f3341"
EMBEDSTORE_ID_NAMESPACE = os.getenv("EMBEDSTORE_ID_NAMESPACE", DEFAULT_ID_NAMESPACE)

# Custom search filters: and|replace
EMBEDSTORE_FILTER_MODE = os.getenv("EMBEDSTORE_FILTER_MODE", "and")

# Search limits
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 100

# Payload keys
ORIGINAL_ID_FIELD = "original_id"
VISIBILITY_FIELD = "allow_reference"

VERSION = "1.0.0"

FILTER_MODES = ("and", "replace")
ENGINE_BACKENDS = ("qdrant", "memory")


def get_vector_engine():
    """Get the configured vector engine implementation."""
    if EMBEDSTORE_ENGINE == "memory":
        from ..vector.engine import InMemoryVectorEngine
        return InMemoryVectorEngine()

    from ..vector.qdrant_engine import QdrantVectorEngine
    return QdrantVectorEngine(
        url=QDRANT_URL,
        api_key=QDRANT_API_KEY or None,
        timeout=QDRANT_TIMEOUT_SEC,
    )


def get_collection_name():
    """Get the configured collection name."""
    return QDRANT_COLLECTION


def get_id_namespace():
    """Get the identifier namespace as a UUID."""
    return uuid.UUID(EMBEDSTORE_ID_NAMESPACE)


def get_filter_mode():
    """Get the default custom-filter mode (and|replace)."""
    return EMBEDSTORE_FILTER_MODE


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def validate_config():
    """Validate gateway configuration and return any issues."""
    issues = []

    if EMBEDSTORE_ENGINE not in ENGINE_BACKENDS:
        issues.append(f"Invalid EMBEDSTORE_ENGINE: {EMBEDSTORE_ENGINE}")

    if EMBEDSTORE_FILTER_MODE not in FILTER_MODES:
        issues.append(f"Invalid EMBEDSTORE_FILTER_MODE: {EMBEDSTORE_FILTER_MODE}")

    if not QDRANT_COLLECTION.strip():
        issues.append("QDRANT_COLLECTION cannot be empty")

    try:
        uuid.UUID(EMBEDSTORE_ID_NAMESPACE)
    except ValueError:
        issues.append(f"EMBEDSTORE_ID_NAMESPACE is not a UUID: {EMBEDSTORE_ID_NAMESPACE}")

    if QDRANT_TIMEOUT_SEC < 1:
        issues.append("QDRANT_TIMEOUT_SEC must be >= 1")

    return issues
