from abc import ABC, abstractmethod
from typing import Any, Generic, List, TypeVar

from chatbot.domain.result import Result

T = TypeVar('T')  # Generic type for the entity
K = TypeVar('K')  # Generic type for the entity ID


class RepositoryInterface(Generic[T, K], ABC):
    """
    Generic repository interface defining standard CRUD operations.
    Following the Repository pattern to abstract data access.

    Operations return a Result instead of raising; expected failures are
    reported as Err values tagged with an ErrorKind.
    """

    @abstractmethod
    def list_all(self) -> Result[List[T]]:
        """
        Retrieves every entity.

        Returns:
            Ok with the entities in store order, or Err(STORE)
        """
        pass

    @abstractmethod
    def get_by_id(self, id: K) -> Result[T]:
        """
        Retrieves an entity by its ID.

        Args:
            id: The ID of the entity to retrieve

        Returns:
            Ok with the entity, Err(NOT_FOUND) or Err(STORE)
        """
        pass

    @abstractmethod
    def create(self, data: Any) -> Result[K]:
        """
        Validates and creates a new entity.

        Args:
            data: Raw entity data

        Returns:
            Ok with the generated ID, Err(VALIDATION) or Err(STORE)
        """
        pass

    @abstractmethod
    def update(self, id: K, data: Any) -> Result[None]:
        """
        Validates and merges data into an entity, creating it when missing.

        Args:
            id: The ID of the entity to update
            data: Raw entity data

        Returns:
            Ok(None), Err(VALIDATION) or Err(STORE)
        """
        pass

    @abstractmethod
    def remove(self, id: K) -> Result[None]:
        """
        Deletes an entity by its ID; a missing entity is not an error.

        Args:
            id: The ID of the entity to delete

        Returns:
            Ok(None) or Err(STORE)
        """
        pass
