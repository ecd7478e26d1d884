from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import copy

from chatbot.utils.exceptions import DocumentStoreError


@dataclass(frozen=True)
class DocumentSnapshot:
    """
    A document read from a collection.

    `exists` is False when the requested id has no document; `data` is then
    empty.
    """
    id: str
    exists: bool
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Optional[Dict[str, Any]]:
        """Copy of the document body, or None when the document is absent."""
        if not self.exists:
            return None
        return copy.deepcopy(self.data)


class CollectionReference(ABC):
    """
    CRUD access to one collection of a document store.

    Implementations raise DocumentStoreError when the backend fails.
    """

    @abstractmethod
    def stream(self) -> List[DocumentSnapshot]:
        """
        Read every document of the collection.

        Returns:
            Snapshots in the order the backend returns them
        """
        pass

    @abstractmethod
    def get(self, document_id: str) -> DocumentSnapshot:
        """
        Read one document.

        Args:
            document_id: Document identifier

        Returns:
            Snapshot with exists=False when there is no such document
        """
        pass

    @abstractmethod
    def add(self, data: Dict[str, Any]) -> str:
        """
        Insert a document under a store-assigned identifier.

        Args:
            data: Document body

        Returns:
            The new document identifier
        """
        pass

    @abstractmethod
    def set(self, document_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        """
        Write a document under a caller-supplied identifier.

        Args:
            document_id: Document identifier
            data: Document body
            merge: Overlay the given fields onto the stored document instead
                of replacing it; a missing document is created either way
        """
        pass

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """
        Delete a document. Deleting a missing document is not an error.

        Args:
            document_id: Document identifier
        """
        pass


class DocumentStore(ABC):
    """A document store organised in named collections."""

    @abstractmethod
    def collection(self, name: str) -> CollectionReference:
        pass

    @abstractmethod
    def ping(self) -> bool:
        """
        Check that the backend is reachable.

        Raises:
            DocumentStoreError: If the backend cannot be reached
        """
        pass

    def health_check(self) -> Dict[str, Any]:
        """Report backend status without raising."""
        try:
            self.ping()
            return {"status": "ok"}
        except DocumentStoreError as e:
            return {"status": "error", "error": str(e)}

    def close(self) -> None:
        """Release backend resources."""
        pass
