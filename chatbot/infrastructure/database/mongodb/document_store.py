from typing import Any, Dict, List

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from chatbot.domain.interfaces.document_store import (
    CollectionReference,
    DocumentSnapshot,
    DocumentStore
)
from chatbot.infrastructure.database.mongodb.client import MongoDBClient
from chatbot.utils.exceptions import DatabaseConnectionError, DocumentStoreError
from chatbot.utils.logger import get_logger

logger = get_logger(__name__)


def _id_filter(document_id: str) -> Dict[str, Any]:
    # Documents written outside this service may carry native ObjectId keys.
    if ObjectId.is_valid(document_id):
        return {"_id": {"$in": [document_id, ObjectId(document_id)]}}
    return {"_id": document_id}


def _snapshot(document: Dict[str, Any]) -> DocumentSnapshot:
    data = dict(document)
    document_id = str(data.pop("_id"))
    return DocumentSnapshot(id=document_id, exists=True, data=data)


class MongoCollectionReference(CollectionReference):
    """
    Collection access backed by a pymongo collection.

    Documents are keyed by a string `_id` so store-assigned and
    caller-supplied identifiers look alike; `_id` never appears in the
    document body handed back to callers. Existing documents keyed by a
    native ObjectId are read, written and deleted through its hex string.
    """

    def __init__(self, db_client: MongoDBClient, name: str):
        self.db_client = db_client
        self.name = name

    def _collection(self) -> Collection:
        return self.db_client.get_collection(self.name)

    def stream(self) -> List[DocumentSnapshot]:
        try:
            return [_snapshot(document) for document in self._collection().find({})]
        except (PyMongoError, DatabaseConnectionError) as e:
            logger.error(f"Failed to read collection {self.name}: {str(e)}")
            raise DocumentStoreError(f"Failed to read collection {self.name}") from e

    def get(self, document_id: str) -> DocumentSnapshot:
        try:
            document = self._collection().find_one(_id_filter(document_id))
        except (PyMongoError, DatabaseConnectionError) as e:
            logger.error(f"Failed to read document {self.name}/{document_id}: {str(e)}")
            raise DocumentStoreError(f"Failed to read document {document_id}") from e

        if document is None:
            return DocumentSnapshot(id=document_id, exists=False)
        return _snapshot(document)

    def add(self, data: Dict[str, Any]) -> str:
        document_id = str(ObjectId())
        try:
            result = self._collection().insert_one({**data, "_id": document_id})
        except (PyMongoError, DatabaseConnectionError) as e:
            logger.error(f"Failed to insert into {self.name}: {str(e)}")
            raise DocumentStoreError(f"Failed to insert into {self.name}") from e

        if not result.acknowledged:
            raise DocumentStoreError(f"Insert into {self.name} was not acknowledged")
        return document_id

    def _stored_key(self, collection: Collection, document_id: str) -> Any:
        if not ObjectId.is_valid(document_id):
            return document_id
        existing = collection.find_one(_id_filter(document_id), {"_id": 1})
        return existing["_id"] if existing is not None else document_id

    def set(self, document_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        body = {key: value for key, value in data.items() if key != "_id"}
        try:
            collection = self._collection()
            key = self._stored_key(collection, document_id)
            if merge:
                collection.update_one({"_id": key}, {"$set": body}, upsert=True)
            else:
                collection.replace_one({"_id": key}, body, upsert=True)
        except (PyMongoError, DatabaseConnectionError) as e:
            logger.error(f"Failed to write document {self.name}/{document_id}: {str(e)}")
            raise DocumentStoreError(f"Failed to write document {document_id}") from e

    def delete(self, document_id: str) -> None:
        try:
            self._collection().delete_one(_id_filter(document_id))
        except (PyMongoError, DatabaseConnectionError) as e:
            logger.error(f"Failed to delete document {self.name}/{document_id}: {str(e)}")
            raise DocumentStoreError(f"Failed to delete document {document_id}") from e


class MongoDocumentStore(DocumentStore):
    """Document store on top of a single MongoDB database."""

    def __init__(self, db_client: MongoDBClient):
        self.db_client = db_client

    def collection(self, name: str) -> MongoCollectionReference:
        return MongoCollectionReference(self.db_client, name)

    def ping(self) -> bool:
        try:
            return self.db_client.ping()
        except DatabaseConnectionError as e:
            raise DocumentStoreError(str(e)) from e

    def health_check(self) -> Dict[str, Any]:
        return self.db_client.health_check()

    def close(self) -> None:
        self.db_client.close()
