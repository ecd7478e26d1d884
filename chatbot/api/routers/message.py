from typing import Any, Mapping

from fastapi import APIRouter, Body, Depends, status

from chatbot.api.dependencies import (
    get_message_service,
    get_request_logger_dependency
)
from chatbot.api.error_handlers import raise_for_error
from chatbot.domain.schemas.training_data import MessageResponse
from chatbot.domain.services.message_service import MessageClassificationService
from chatbot.utils.logger import LoggerAdapter

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Classify a chat message",
    response_description="Raw classification result"
)
def classify_message(
    payload: Any = Body(None),
    message_service: MessageClassificationService = Depends(get_message_service),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> dict:
    """
    Classify a message against the current training data.

    A missing or empty message is passed to the classifier as-is.

    Args:
        payload: {message}
        message_service: Message classification service
        logger: Request logger

    Returns:
        {"response": ClassificationResult}
    """
    message = payload.get("message") if isinstance(payload, Mapping) else None
    logger.info("Classifying message")

    result = message_service.classify(message)
    if not result.ok:
        raise_for_error(result)
    return {"response": result.value.to_dict()}
