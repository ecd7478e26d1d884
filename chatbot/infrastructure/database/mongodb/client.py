from typing import Any, Dict, Optional
import time

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import (
    ConnectionFailure,
    ServerSelectionTimeoutError,
    ConfigurationError,
    PyMongoError
)
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from chatbot.utils.logger import get_logger
from chatbot.utils.exceptions import DatabaseConnectionError

logger = get_logger(__name__)


class MongoDBClient:
    """
    MongoDB client wrapper.

    Owns one pymongo MongoClient (which pools connections internally) for
    the lifetime of the process and hands out database and collection
    handles.
    """

    def __init__(
        self,
        connection_uri: str,
        database_name: str,
        pool_size: int = 10,
        max_idle_time: int = 60000,
        connect_timeout: int = 30000,
        server_selection_timeout: int = 30000,
        **kwargs
    ):
        """
        Initialize MongoDB client.

        Args:
            connection_uri: MongoDB connection URI
            database_name: Name of the database to connect to
            pool_size: Size of the connection pool
            max_idle_time: Maximum time a connection can be idle (ms)
            connect_timeout: Connection timeout (ms)
            server_selection_timeout: Server selection timeout (ms)
            **kwargs: Additional connection options
        """
        self.connection_uri = connection_uri
        self.database_name = database_name
        self.pool_size = pool_size
        self.max_idle_time = max_idle_time
        self.connection_options = {
            "maxPoolSize": pool_size,
            "maxIdleTimeMS": max_idle_time,
            "connectTimeoutMS": connect_timeout,
            "serverSelectionTimeoutMS": server_selection_timeout,
            "retryWrites": True,
            **kwargs
        }
        self._client: Optional[MongoClient] = None

        # Track connection statistics
        self.stats: Dict[str, Any] = {
            "last_connection_error": None,
            "last_successful_connection": None
        }

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(DatabaseConnectionError),
        reraise=True
    )
    def connect(self) -> MongoClient:
        """
        Create the MongoDB client and verify it with a ping.

        Attempted up to three times before the error is raised.

        Raises:
            DatabaseConnectionError: If the server cannot be reached
        """
        try:
            self._client = MongoClient(
                self.connection_uri,
                **self.connection_options
            )

            # Verify connection by pinging the database
            self._client.admin.command('ping')

            self.stats["last_successful_connection"] = time.time()
            logger.info(
                "Successfully connected to MongoDB",
                extra={"database_name": self.database_name}
            )
            return self._client
        except (ConnectionFailure, ServerSelectionTimeoutError, ConfigurationError) as e:
            logger.error(f"Failed to connect to MongoDB: {str(e)}")
            self.stats["last_connection_error"] = {
                "timestamp": time.time(),
                "error": str(e)
            }
            raise DatabaseConnectionError(f"MongoDB connection failed: {str(e)}") from e

    def get_connection(self) -> MongoClient:
        """
        Get MongoDB client, connecting on first use.

        Returns:
            MongoDB client
        """
        if self._client is None:
            return self.connect()
        return self._client

    def get_database(self) -> Database:
        return self.get_connection()[self.database_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.get_database()[collection_name]

    def ping(self) -> bool:
        """
        Test connection to MongoDB.

        Returns:
            True if connection is successful

        Raises:
            DatabaseConnectionError: If connection test fails
        """
        try:
            self.get_connection().admin.command('ping')
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {str(e)}")
            raise DatabaseConnectionError(f"MongoDB ping failed: {str(e)}") from e

    def health_check(self) -> Dict[str, Any]:
        """
        Check MongoDB health status.

        Returns:
            Dictionary containing health check results
        """
        try:
            start_time = time.time()
            server_info = self.get_connection().server_info()
            response_time = time.time() - start_time

            return {
                "status": "ok",
                "response_time_ms": round(response_time * 1000, 2),
                "version": server_info.get("version", "unknown"),
                "database": self.database_name,
                "connection_pool": {
                    "pool_size": self.pool_size,
                    "max_idle_time_ms": self.max_idle_time
                },
            }
        except (PyMongoError, DatabaseConnectionError) as e:
            logger.error(f"MongoDB health check failed: {str(e)}")
            return {
                "status": "error",
                "error": str(e),
                "stats": dict(self.stats)
            }

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.debug("Closed MongoDB client connection")
