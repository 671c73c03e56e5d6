"""
Lazy collection provisioning. The collection is created on first store
with the width of the first vector written to it.
"""

from ..core.exceptions import CollectionExistsError, ProvisioningError
from ..util.logging import logger
from .engine import VectorEngine


class CollectionProvisioner:
    """Ensures the configured collection exists before writes.

    Two callers may both see the collection missing and both try to create
    it. The loser's "already exists" failure counts as success; any other
    creation failure is fatal for the store that triggered it.
    """

    def __init__(self, engine: VectorEngine, collection: str, distance: str = "cosine"):
        self.engine = engine
        self.collection = collection
        self.distance = distance

    def ensure(self, dimension: int) -> None:
        try:
            existing = self.engine.list_collections()
        except Exception as e:
            logger.log_provisioning(self.collection, "failed", {"stage": "list", "error": str(e)})
            raise ProvisioningError(f"Could not list collections: {e}") from e

        if self.collection in existing:
            return

        try:
            self.engine.create_collection(self.collection, dimension, self.distance)
        except CollectionExistsError:
            logger.log_provisioning(self.collection, "raced", {"dimension": dimension})
            return
        except Exception as e:
            logger.log_provisioning(self.collection, "failed", {"dimension": dimension, "error": str(e)})
            raise ProvisioningError(
                f"Could not create collection {self.collection}: {e}",
                details={"collection": self.collection, "dimension": dimension},
            ) from e

        logger.log_provisioning(self.collection, "created", {"dimension": dimension, "distance": self.distance})
