"""
Base Repository Class
Provides whole-document load and save for all repositories
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
import logging

from db.database import document_store, DocumentStore

logger = logging.getLogger(__name__)

class BaseRepository(ABC):
    """Base repository mapping one stored JSON document to entities"""

    def __init__(self, document_key: str, store: DocumentStore = None):
        self.document_key = document_key
        self.store = store or document_store

    @abstractmethod
    def from_document(self, document: Any) -> Any:
        """Build entities from a decoded document; raise on malformed input"""

    @abstractmethod
    def to_document(self, entities: Any) -> Any:
        """Convert entities to a JSON-serializable document"""

    def load(self) -> Optional[Any]:
        """Load and map the document; None when absent or unreadable"""
        try:
            document = self.store.get_json(self.document_key)
        except ValueError as e:
            logger.warning(f"Stored document '{self.document_key}' is not valid JSON: {e}")
            return None

        if document is None:
            return None

        try:
            return self.from_document(document)
        except (KeyError, TypeError, ValueError, ArithmeticError, AttributeError) as e:
            logger.warning(f"Stored document '{self.document_key}' is malformed: {e}")
            return None

    def save(self, entities: Any) -> None:
        """Replace the stored document"""
        self.store.set(self.document_key, self.to_document(entities))
        logger.debug(f"Saved document '{self.document_key}'")

    def clear(self) -> None:
        """Remove the stored document"""
        self.store.remove(self.document_key)
        logger.debug(f"Removed document '{self.document_key}'")

    def exists(self) -> bool:
        """Check if a document is stored"""
        return self.store.get(self.document_key) is not None
