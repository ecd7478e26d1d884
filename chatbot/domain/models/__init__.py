from chatbot.domain.models.classification import ClassificationResult, Entity, IntentScore, NONE_INTENT
from chatbot.domain.models.training_record import TrainingRecord

__all__ = [
    "ClassificationResult",
    "Entity",
    "IntentScore",
    "NONE_INTENT",
    "TrainingRecord",
]
