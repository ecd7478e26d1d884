from typing import Iterable, Optional

from chatbot.domain.models.training_record import TrainingRecord
from chatbot.infrastructure.ai.intent.intent_classifier import IntentClassifier
from chatbot.utils.logger import get_logger

logger = get_logger(__name__)


def build_classifier(
    records: Iterable[TrainingRecord],
    language: str = "en",
    force_ner: bool = True,
    threshold: float = 0.5,
    random_state: Optional[int] = None
) -> IntentClassifier:
    """
    Build and train a throwaway classifier from training records.

    Every utterance is registered as an example of its record's intent and
    every answer as a candidate response for that intent, in record order.
    Duplicate utterances are registered as-is. The classifier is fully
    trained when this returns and is never persisted.

    Args:
        records: Training records, usually the whole collection
        language: The single locale the classifier works in
        force_ner: Extract builtin entities from classified messages
        threshold: Minimum score for an intent to be reported
        random_state: Seed for answer selection

    Returns:
        IntentClassifier: Trained classifier
    """
    classifier = IntentClassifier(
        languages=[language],
        force_ner=force_ner,
        threshold=threshold,
        random_state=random_state
    )

    record_count = 0
    for record in records:
        record_count += 1
        for utterance in record.utterances:
            classifier.add_document(language, utterance, record.intent)
        for answer in record.answers:
            classifier.add_answer(language, record.intent, answer)

    logger.info("Training", extra={"record_count": record_count})
    summary = classifier.train()
    logger.info(
        "Done training",
        extra={"utterance_count": summary["num_samples"], "intent_count": summary["num_classes"]}
    )
    return classifier
