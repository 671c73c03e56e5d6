"""
Structured logging for gateway operations: store, delete, search and provisioning.
"""

import logging
from typing import Any, Dict

class StructuredLogger:
    """Structured logger for vector gateway operations."""

    def __init__(self, name: str = "embedstore"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_vector_operation(self, operation: str, record_id: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector operation."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)

        level = logging.ERROR if status == "failed" else logging.INFO
        self.log_operation(f"vector.{operation}", status, log_details, level)

    def log_provisioning(self, collection: str, status: str, details: Dict[str, Any] = None):
        """Log collection provisioning (created, exists, raced, failed)."""
        log_details = {"collection": collection}
        if details:
            log_details.update(details)

        level = logging.ERROR if status == "failed" else logging.INFO
        self.log_operation("collection.ensure", status, log_details, level)

    def log_degraded_reconciliation(self, internal_id: str, id_field: str):
        """Log a search hit that had to fall back to its engine id."""
        log_details = {
            "internal_id": internal_id,
            "missing_field": id_field,
        }
        self.log_operation("vector.reconcile", "degraded", log_details, logging.WARNING)

    # Standard logging methods for compatibility
    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()

# Payload sanitization utility
def sanitize_payload(payload: Any, max_items: int = 10) -> Any:
    """Shorten payloads for logging: truncate strings, cap list length."""
    if isinstance(payload, dict):
        return {k: sanitize_payload(v, max_items) for k, v in payload.items()}
    elif isinstance(payload, str):
        return payload[:100] + "..." if len(payload) > 100 else payload
    elif isinstance(payload, (list, tuple)):
        items = [sanitize_payload(item, max_items) for item in payload[:max_items]]
        if len(payload) > max_items:
            items.append(f"... (+{len(payload) - max_items})")
        return items
    else:
        return payload

