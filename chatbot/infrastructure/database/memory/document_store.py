import copy
import threading
from typing import Any, Dict, List

from bson import ObjectId

from chatbot.domain.interfaces.document_store import (
    CollectionReference,
    DocumentSnapshot,
    DocumentStore
)
from chatbot.utils.logger import get_logger

logger = get_logger(__name__)


class InMemoryCollectionReference(CollectionReference):
    """Collection held in a dict; values are deep-copied in and out."""

    def __init__(self, documents: Dict[str, Dict[str, Any]], lock: threading.RLock):
        self._documents = documents
        self._lock = lock

    def stream(self) -> List[DocumentSnapshot]:
        with self._lock:
            return [
                DocumentSnapshot(id=document_id, exists=True, data=copy.deepcopy(data))
                for document_id, data in self._documents.items()
            ]

    def get(self, document_id: str) -> DocumentSnapshot:
        with self._lock:
            data = self._documents.get(document_id)
            if data is None:
                return DocumentSnapshot(id=document_id, exists=False)
            return DocumentSnapshot(id=document_id, exists=True, data=copy.deepcopy(data))

    def add(self, data: Dict[str, Any]) -> str:
        document_id = str(ObjectId())
        with self._lock:
            self._documents[document_id] = copy.deepcopy(data)
        return document_id

    def set(self, document_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        with self._lock:
            if merge and document_id in self._documents:
                self._documents[document_id].update(copy.deepcopy(data))
            else:
                self._documents[document_id] = copy.deepcopy(data)

    def delete(self, document_id: str) -> None:
        with self._lock:
            self._documents.pop(document_id, None)


class InMemoryDocumentStore(DocumentStore):
    """
    Process-local document store.

    Used for local development (STORE_BACKEND=memory) and as the store of
    the test suite. Collections keep insertion order.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

        # Lock for thread safety
        self._lock = threading.RLock()

        logger.info("In-memory document store initialized")

    def collection(self, name: str) -> InMemoryCollectionReference:
        with self._lock:
            documents = self._collections.setdefault(name, {})
        return InMemoryCollectionReference(documents, self._lock)

    def ping(self) -> bool:
        return True

    def health_check(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "status": "ok",
                "backend": "memory",
                "collections": {
                    name: len(documents) for name, documents in self._collections.items()
                },
            }
