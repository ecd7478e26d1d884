from typing import Any, List

from chatbot.domain.interfaces.document_store import DocumentStore
from chatbot.domain.interfaces.repository_interface import RepositoryInterface
from chatbot.domain.models.training_record import TrainingRecord
from chatbot.domain.result import Err, ErrorKind, Ok, Result
from chatbot.domain.validators import validate_training_record
from chatbot.utils.exceptions import DocumentStoreError
from chatbot.utils.logger import get_logger

logger = get_logger(__name__)

STORE_ERROR_MESSAGE = "Document store unavailable"


class TrainingDataRepository(RepositoryInterface[TrainingRecord, str]):
    """
    Repository for intent training records.

    Reads and writes records through the document store passed in; the
    record id is the document id and is attached on read only.
    """

    def __init__(self, document_store: DocumentStore, collection_name: str = "trainingData"):
        """
        Initialize the training data repository.

        Args:
            document_store: Shared document store
            collection_name: Collection holding the training records
        """
        self.document_store = document_store
        self.collection_name = collection_name

    def _collection(self):
        return self.document_store.collection(self.collection_name)

    def list_all(self) -> Result[List[TrainingRecord]]:
        try:
            snapshots = self._collection().stream()
        except DocumentStoreError as e:
            logger.error(f"Failed to list training data: {str(e)}")
            return Err(ErrorKind.STORE, STORE_ERROR_MESSAGE)

        records = [
            TrainingRecord.from_document(snapshot.id, snapshot.data)
            for snapshot in snapshots
        ]
        logger.debug(f"Listed {len(records)} training records")
        return Ok(records)

    def get_by_id(self, id: str) -> Result[TrainingRecord]:
        try:
            snapshot = self._collection().get(id)
        except DocumentStoreError as e:
            logger.error(f"Failed to retrieve training record {id}: {str(e)}")
            return Err(ErrorKind.STORE, STORE_ERROR_MESSAGE)

        if not snapshot.exists:
            logger.info(f"Training record not found: {id}")
            return Err(ErrorKind.NOT_FOUND, f"Training record {id} not found")
        return Ok(TrainingRecord.from_document(snapshot.id, snapshot.data))

    def create(self, data: Any) -> Result[str]:
        validated = validate_training_record(data)
        if not validated.ok:
            return validated

        record = validated.value
        try:
            document_id = self._collection().add(record.to_document())
        except DocumentStoreError as e:
            logger.error(f"Failed to create training record: {str(e)}")
            return Err(ErrorKind.STORE, STORE_ERROR_MESSAGE)

        logger.info(
            f"Created training record {document_id}",
            extra={"intent": record.intent, "utterance_count": len(record.utterances)}
        )
        return Ok(document_id)

    def update(self, id: str, data: Any) -> Result[None]:
        validated = validate_training_record(data)
        if not validated.ok:
            return validated

        record = validated.value
        try:
            self._collection().set(id, record.to_document(), merge=True)
        except DocumentStoreError as e:
            logger.error(f"Failed to update training record {id}: {str(e)}")
            return Err(ErrorKind.STORE, STORE_ERROR_MESSAGE)

        logger.info(f"Updated training record {id}", extra={"intent": record.intent})
        return Ok(None)

    def remove(self, id: str) -> Result[None]:
        try:
            self._collection().delete(id)
        except DocumentStoreError as e:
            logger.error(f"Failed to delete training record {id}: {str(e)}")
            return Err(ErrorKind.STORE, STORE_ERROR_MESSAGE)

        logger.info(f"Deleted training record {id}")
        return Ok(None)
