from chatbot.config import Settings
from chatbot.domain.interfaces.document_store import DocumentStore
from chatbot.infrastructure.database.memory.document_store import InMemoryDocumentStore
from chatbot.infrastructure.database.mongodb.client import MongoDBClient
from chatbot.infrastructure.database.mongodb.document_store import MongoDocumentStore
from chatbot.utils.logger import get_logger

logger = get_logger(__name__)


def create_document_store(settings: Settings) -> DocumentStore:
    """
    Build the document store selected by STORE_BACKEND.

    The MongoDB client connects lazily; call ping() to fail fast.

    Args:
        settings: Application settings

    Returns:
        DocumentStore: Store instance shared by every request
    """
    if settings.STORE_BACKEND == "memory":
        logger.warning("Using the in-memory document store; data is lost on restart")
        return InMemoryDocumentStore()

    db_client = MongoDBClient(
        connection_uri=settings.MONGODB_URI,
        database_name=settings.DATABASE_NAME,
        server_selection_timeout=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    )
    logger.info(
        "Using the MongoDB document store",
        extra={"database_name": settings.DATABASE_NAME}
    )
    return MongoDocumentStore(db_client)
