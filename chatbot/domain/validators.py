"""
Shape checks for training records submitted by clients.

The checks run in a fixed order and the first failure decides the message
returned to the client: presence of every field first, then types, then
lengths.
"""

from typing import Any, Mapping

from chatbot.domain.models.training_record import TrainingRecord
from chatbot.domain.result import Err, ErrorKind, Ok, Result


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_missing(value: Any) -> bool:
    # Empty JSON arrays and objects are present; later checks reject them.
    if _is_sequence(value) or isinstance(value, Mapping):
        return False
    return not value


def validate_training_record(raw: Any) -> Result[TrainingRecord]:
    """
    Validate a raw training record and keep only its known fields.

    Args:
        raw: Decoded request body; anything but a mapping counts as empty

    Returns:
        Ok(TrainingRecord) without an id, or Err(VALIDATION) naming the first
        violated constraint
    """
    data = raw if isinstance(raw, Mapping) else {}
    intent = data.get("intent")
    utterances = data.get("utterances")
    answers = data.get("answers")

    if _is_missing(intent):
        return Err(ErrorKind.VALIDATION, "Missing 'intent' prop")
    if _is_missing(utterances):
        return Err(ErrorKind.VALIDATION, "Missing 'utterances' prop")
    if _is_missing(answers):
        return Err(ErrorKind.VALIDATION, "Missing 'answers' prop")
    if not _is_sequence(utterances):
        return Err(ErrorKind.VALIDATION, "Property 'utterances' should be an array")
    if not _is_sequence(answers):
        return Err(ErrorKind.VALIDATION, "Property 'answers' should be an array")
    if len(answers) == 0:
        return Err(ErrorKind.VALIDATION, "There should be at least one answer")
    if len(utterances) == 0:
        return Err(ErrorKind.VALIDATION, "There should be at least one utterance")

    return Ok(TrainingRecord(
        intent=intent,
        utterances=list(utterances),
        answers=list(answers),
    ))
