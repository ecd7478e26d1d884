from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from chatbot.api.dependencies import (
    get_request_logger_dependency,
    get_training_data_repository
)
from chatbot.api.error_handlers import raise_for_error
from chatbot.domain.schemas.training_data import (
    ErrorResponse,
    TrainingRecordCreated,
    TrainingRecordResponse
)
from chatbot.infrastructure.repositories.training_data_repository import TrainingDataRepository
from chatbot.utils.logger import LoggerAdapter

router = APIRouter()


@router.get(
    "",
    response_model=List[TrainingRecordResponse],
    status_code=status.HTTP_200_OK,
    summary="List training data",
    response_description="Every training record"
)
def list_training_data(
    repository: TrainingDataRepository = Depends(get_training_data_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> List[dict]:
    """
    List every training record.

    Args:
        repository: Training data repository
        logger: Request logger

    Returns:
        List of training records with their ids
    """
    logger.info("Listing training data")
    result = repository.list_all()
    if not result.ok:
        raise_for_error(result)
    return [record.to_dict() for record in result.value]


@router.get(
    "/{record_id}",
    response_model=TrainingRecordResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a training record",
    responses={404: {"description": "No record with this id"}}
)
def get_training_record(
    record_id: str = Path(..., description="Training record ID"),
    repository: TrainingDataRepository = Depends(get_training_data_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> dict:
    logger.info(f"Fetching training record {record_id}")
    result = repository.get_by_id(record_id)
    if not result.ok:
        raise_for_error(result, record_id)
    return result.value.to_dict()


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a training record",
    response_class=Response
)
def delete_training_record(
    record_id: str = Path(..., description="Training record ID"),
    repository: TrainingDataRepository = Depends(get_training_data_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Response:
    """Delete a training record; deleting a missing record also succeeds."""
    logger.info(f"Deleting training record {record_id}")
    result = repository.remove(record_id)
    if not result.ok:
        raise_for_error(result, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "",
    response_model=TrainingRecordCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a training record",
    responses={422: {"model": ErrorResponse}}
)
def create_training_record(
    payload: Any = Body(None),
    repository: TrainingDataRepository = Depends(get_training_data_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> dict:
    """
    Create a training record.

    The body is validated by the repository so clients get the exact
    reason a record was rejected.

    Args:
        payload: {intent, utterances[], answers[]}
        repository: Training data repository
        logger: Request logger

    Returns:
        The id assigned by the store
    """
    logger.info("Creating training record")
    result = repository.create(payload)
    if not result.ok:
        raise_for_error(result)
    return {"id": result.value}


@router.put(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Merge fields into a training record",
    response_class=Response,
    responses={422: {"model": ErrorResponse}}
)
def update_training_record(
    record_id: str = Path(..., description="Training record ID"),
    payload: Any = Body(None),
    repository: TrainingDataRepository = Depends(get_training_data_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Response:
    """
    Merge a validated record into the stored one.

    Stored fields the body does not name are kept; an unknown id creates
    the record.
    """
    logger.info(f"Updating training record {record_id}")
    result = repository.update(record_id, payload)
    if not result.ok:
        raise_for_error(result, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
