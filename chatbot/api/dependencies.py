from typing import Optional
import uuid

from fastapi import Depends, Header, Request

from chatbot.config import Settings
from chatbot.domain.interfaces.document_store import DocumentStore
from chatbot.domain.services.message_service import MessageClassificationService
from chatbot.infrastructure.repositories.training_data_repository import TrainingDataRepository
from chatbot.utils.logger import get_request_logger, LoggerAdapter


def get_correlation_id(
    request: Request,
    x_correlation_id: Optional[str] = Header(None)
) -> str:
    """
    Extract correlation ID from the request state, headers, or generate a new one.

    Args:
        request: Incoming request
        x_correlation_id: Correlation ID from request header

    Returns:
        str: Correlation ID
    """
    state_id = getattr(request.state, "correlation_id", None)
    return state_id or x_correlation_id or str(uuid.uuid4())


def get_request_logger_dependency(
    correlation_id: str = Depends(get_correlation_id)
) -> LoggerAdapter:
    """
    Provide a configured logger for the request context.

    Args:
        correlation_id: Request correlation ID

    Returns:
        LoggerAdapter: Configured logger
    """
    return get_request_logger("chatbot.api", correlation_id)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_document_store(request: Request) -> DocumentStore:
    """
    Provide the process-wide document store created at startup.

    Args:
        request: Incoming request

    Returns:
        DocumentStore: Shared store instance
    """
    return request.app.state.document_store


def get_training_data_repository(
    document_store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_app_settings)
) -> TrainingDataRepository:
    return TrainingDataRepository(
        document_store=document_store,
        collection_name=settings.TRAINING_DATA_COLLECTION
    )


def get_message_service(
    repository: TrainingDataRepository = Depends(get_training_data_repository),
    settings: Settings = Depends(get_app_settings)
) -> MessageClassificationService:
    """
    Provide the message classification service.

    Args:
        repository: Training data repository
        settings: Application settings

    Returns:
        MessageClassificationService: Service instance
    """
    return MessageClassificationService(
        repository=repository,
        language=settings.LANGUAGE,
        force_ner=settings.FORCE_NER,
        threshold=settings.CLASSIFIER_THRESHOLD
    )
